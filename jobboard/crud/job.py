"""
CRUD operations for jobs.

Implements the Repository pattern over positionally-parameterized SQL.
This module is the only place that translates between the storage column
company_handle and the wire name companyHandle. Jobs are addressed by
their company's handle, so get/update/remove act on one job per handle.

Every function raises typed errors (NotFoundError, EmptyUpdateError,
InvalidFieldError) or lets store faults propagate; none of them map
errors to responses.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from jobboard.core.database import execute
from jobboard.core.exceptions import NotFoundError
from jobboard.helpers.sql import build_set_fragment, restrict_fields

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'title, salary, equity, company_handle AS "companyHandle"'

# Wire field -> column for partial updates; also the set of updatable fields
UPDATE_FIELDS = {
    "salary": "salary",
    "equity": "equity",
}


def row_to_job(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize a row so equity is always text.

    Postgres returns NUMERIC as Decimal, whose str() keeps the stored scale
    ("0.020"). SQLite stores NUMERIC as REAL, so there "0.020" comes back
    as "0.02" and long decimals lose precision.
    """
    job = dict(row)
    if job.get("equity") is not None:
        job["equity"] = str(job["equity"])
    return job


def create(
    db: Session,
    title: str,
    salary: Optional[int],
    equity: Optional[str],
    company_handle: str
) -> Dict[str, Any]:
    """
    Create a new job.

    No existence check is made on company_handle; the foreign key does it.

    Args:
        db: Database session
        title: Job title
        salary: Salary, or None
        equity: Equity as a decimal string, or None
        company_handle: Handle of the owning company

    Returns:
        The created job

    Raises:
        IntegrityError: If company_handle references no company
    """
    rows = execute(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [title, salary, equity, company_handle],
        commit=True,
    )
    logger.info(f"Created job '{title}' for company {company_handle}")
    return row_to_job(rows[0])


def get_all(db: Session) -> List[Dict[str, Any]]:
    """Every job, ordered by title."""
    rows = execute(db, f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY title")
    return [row_to_job(row) for row in rows]


def filter_jobs(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[str] = None
) -> List[Dict[str, Any]]:
    """
    Retrieve jobs matching optional filters.

    Salary and equity are filtered in SQL:
    - salary >= min_salary always applies (min_salary defaults to 0)
    - has_equity == "true" keeps jobs with non-null, positive equity; any
      other value, "false" included, applies no equity filter at all

    The title, when given, is matched afterwards as a case-insensitive
    substring. SQL LOWER() only folds ASCII on SQLite and on Postgres C
    collations, so the match is done with str.lower() to cover all of Unicode.

    Args:
        db: Database session
        title: Substring to look for in the title
        min_salary: Minimum salary
        has_equity: "true" to require equity

    Returns:
        Matching jobs in storage order
    """
    sql = f"SELECT {JOB_COLUMNS} FROM jobs WHERE salary >= $1"
    if has_equity == "true":
        sql += " AND equity > 0 AND equity IS NOT NULL"

    jobs = [row_to_job(row) for row in execute(db, sql, [min_salary or 0])]

    if title is None:
        return jobs

    needle = title.lower()
    return [job for job in jobs if needle in job["title"].lower()]


def get(db: Session, company_handle: str) -> Dict[str, Any]:
    """
    Retrieve the job for a company handle.

    Raises:
        NotFoundError: If the company has no job
    """
    rows = execute(
        db,
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1",
        [company_handle],
    )
    if not rows:
        raise NotFoundError(f"No job: {company_handle}")

    return row_to_job(rows[0])


def update(db: Session, company_handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partially update the job for a company handle.

    Only the fields present in data change; title and company_handle are
    not updatable.

    Args:
        db: Database session
        company_handle: Handle of the owning company
        data: Field name to new value (salary and/or equity)

    Returns:
        The updated job

    Raises:
        InvalidFieldError: If data names a field other than salary/equity
        EmptyUpdateError: If data is empty
        NotFoundError: If the company has no job
    """
    fields = restrict_fields(data, UPDATE_FIELDS)
    set_cols, values = build_set_fragment(fields, UPDATE_FIELDS)
    handle_idx = len(values) + 1

    rows = execute(
        db,
        f"""UPDATE jobs
            SET {set_cols}
            WHERE company_handle = ${handle_idx}
            RETURNING {JOB_COLUMNS}""",
        [*values, company_handle],
        commit=True,
    )
    if not rows:
        raise NotFoundError(f"No job: {company_handle}")

    logger.info(f"Updated job for company {company_handle}: {sorted(fields)}")
    return row_to_job(rows[0])


def remove(db: Session, company_handle: str) -> None:
    """
    Delete the job for a company handle.

    Raises:
        NotFoundError: If the company has no job
    """
    rows = execute(
        db,
        """DELETE FROM jobs
           WHERE company_handle = $1
           RETURNING company_handle""",
        [company_handle],
        commit=True,
    )
    if not rows:
        raise NotFoundError(f"No job: {company_handle}")

    logger.info(f"Deleted job for company {company_handle}")
