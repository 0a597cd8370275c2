"""
CRUD operations for companies.

Same conventions as jobboard.crud.job: positionally-parameterized SQL,
typed errors, column names translated to wire names with SQL aliases.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from jobboard.core.database import execute
from jobboard.core.exceptions import BadRequestError, DuplicateError, NotFoundError
from jobboard.crud.job import row_to_job
from jobboard.helpers.sql import build_set_fragment, restrict_fields

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

UPDATE_FIELDS = {"name", "description", "numEmployees", "logoUrl"}

# NOT NULL columns; a partial update may omit them but not clear them
REQUIRED_FIELDS = {"name", "description"}

# Only fields whose wire name differs from the column need an entry
COLUMN_NAMES = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _ensure_name_available(db: Session, name: str, exclude_handle: Optional[str] = None) -> None:
    """Raise DuplicateError if another company already uses this name."""
    rows = execute(db, "SELECT handle FROM companies WHERE name = $1", [name])
    if any(row["handle"] != exclude_handle for row in rows):
        raise DuplicateError(f"Duplicate company name: {name}")


def create(
    db: Session,
    handle: str,
    name: str,
    description: str,
    num_employees: Optional[int] = None,
    logo_url: Optional[str] = None
) -> Dict[str, Any]:
    """
    Create a new company.

    Raises:
        DuplicateError: If a company with this handle or name already exists
    """
    existing = execute(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if existing:
        raise DuplicateError(f"Duplicate company: {handle}")

    _ensure_name_available(db, name)

    rows = execute(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [handle, name, description, num_employees, logo_url],
        commit=True,
    )
    logger.info(f"Created company {handle}")
    return rows[0]


def get_all(db: Session) -> List[Dict[str, Any]]:
    """Every company, ordered by name."""
    return execute(db, f"SELECT {COMPANY_COLUMNS} FROM companies ORDER BY name")


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company together with its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = execute(db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    jobs = execute(
        db,
        "SELECT title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY title",
        [handle],
    )
    company["jobs"] = [row_to_job(job) for job in jobs]
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Args:
        db: Database session
        handle: Company handle
        data: Wire field name to new value (name, description, numEmployees, logoUrl)

    Raises:
        InvalidFieldError: If data names a field that cannot be updated
        BadRequestError: If data sets name or description to None
        DuplicateError: If another company already has the new name
        EmptyUpdateError: If data is empty
        NotFoundError: If no company has this handle
    """
    fields = restrict_fields(data, UPDATE_FIELDS)

    cleared = sorted(key for key in REQUIRED_FIELDS if key in fields and fields[key] is None)
    if cleared:
        raise BadRequestError(f"Cannot clear required field(s): {', '.join(cleared)}")

    if "name" in fields:
        _ensure_name_available(db, fields["name"], exclude_handle=handle)
    set_cols, values = build_set_fragment(fields, COLUMN_NAMES)
    handle_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE companies
            SET {set_cols}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*values, handle],
        commit=True,
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {sorted(fields)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company; its jobs go with it (ON DELETE CASCADE).

    Raises:
        NotFoundError: If no company has this handle
    """
    rows = execute(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
        commit=True,
    )
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
