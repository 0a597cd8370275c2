"""
Access policy for state-changing operations.

Pure predicates over an explicitly passed AuthContext. Nothing here reads
request or process state; the FastAPI dependencies in deps.py build the
context and hand it in.
"""

from dataclasses import dataclass
from typing import Optional

from jobboard.core.exceptions import UnauthorizedError


@dataclass(frozen=True)
class AuthContext:
    """Identity of a caller whose token was verified."""
    username: Optional[str] = None
    is_admin: bool = False


def is_authenticated(ctx: Optional[AuthContext]) -> bool:
    return ctx is not None


def is_admin(ctx: Optional[AuthContext]) -> bool:
    return ctx is not None and ctx.is_admin is True


def ensure_admin(ctx: Optional[AuthContext]) -> AuthContext:
    """
    Return the context unchanged if it carries the admin role.

    Raises:
        UnauthorizedError: If the caller is not an admin
    """
    if not is_admin(ctx):
        raise UnauthorizedError()
    return ctx
