import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.core.access import AuthContext
from jobboard.core.database import get_db
from jobboard.core.deps import get_admin_context
from jobboard.crud import job as job_crud
from jobboard.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobEnvelope,
    JobListResponse,
    JobDeletedResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """
    Create a new job for an existing company.

    Requires admin. An unknown companyHandle fails at the database's
    foreign key and surfaces as a 500.
    """
    job = job_crud.create(
        db,
        title=request.title,
        salary=request.salary,
        equity=request.equity,
        company_handle=request.company_handle,
    )
    logger.info(f"Admin {admin.username} created job '{job['title']}' for {job['companyHandle']}")
    return {"job": job}


@router.get("/", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[str] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        title: Case-insensitive substring of the title
        minSalary: Minimum salary
        hasEquity: "true" to only list jobs offering equity; any other value is ignored

    Without any filter all jobs are returned sorted by title; filtered
    results come back in storage order.
    """
    if title or min_salary is not None or has_equity:
        jobs = job_crud.filter_jobs(db, title=title, min_salary=min_salary, has_equity=has_equity)
    else:
        jobs = job_crud.get_all(db)

    return {"jobs": jobs}


@router.get("/{company_handle}", response_model=JobEnvelope)
def get_job(company_handle: str, db: Session = Depends(get_db)):
    """Retrieve the job posted by a company."""
    return {"job": job_crud.get(db, company_handle)}


@router.patch("/{company_handle}", response_model=JobEnvelope)
def update_job(
    company_handle: str,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """
    Partially update a company's job.

    Only salary and equity may be sent; fields left out are unchanged.
    An empty body is a 400.
    """
    job = job_crud.update(db, company_handle, request.model_dump(exclude_unset=True))
    logger.info(f"Admin {admin.username} updated job for {company_handle}")
    return {"job": job}


@router.delete("/{company_handle}", response_model=JobDeletedResponse)
def delete_job(
    company_handle: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """Delete a company's job."""
    job_crud.remove(db, company_handle)
    logger.info(f"Admin {admin.username} deleted job for {company_handle}")
    return {"deleted": company_handle}
