"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract the caller's
AuthContext from the Authorization header.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobboard.core import access
from jobboard.core.access import AuthContext
from jobboard.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>); optional so reads stay public
security = HTTPBearer(auto_error=False)


async def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[AuthContext]:
    """
    Build the caller's AuthContext from a Bearer token if one was sent.

    A missing, malformed or expired token leaves the caller anonymous
    (returns None) rather than failing the request; read endpoints need
    no identity and mutating endpoints reject anonymous callers in
    get_admin_context.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError as e:
        logger.info(f"Ignoring invalid bearer token: {e}")
        return None

    return AuthContext(
        username=payload.get("sub"),
        is_admin=payload.get("is_admin") is True,
    )


async def get_admin_context(
    ctx: Optional[AuthContext] = Depends(get_auth_context),
) -> AuthContext:
    """
    Require an authenticated admin caller.

    Runs before the endpoint body, so a rejected request never reaches
    the repository.

    Raises:
        HTTPException 401: If no valid identity was supplied
        UnauthorizedError: If the caller is not an admin
    """
    if not access.is_authenticated(ctx):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return access.ensure_admin(ctx)
