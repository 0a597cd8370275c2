import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.core.access import AuthContext
from jobboard.core.database import get_db
from jobboard.core.deps import get_admin_context
from jobboard.crud import company as company_crud
from jobboard.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListResponse,
    CompanyDeletedResponse,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """Create a new company. Requires admin."""
    company = company_crud.create(
        db,
        handle=request.handle,
        name=request.name,
        description=request.description,
        num_employees=request.num_employees,
        logo_url=request.logo_url,
    )
    logger.info(f"Admin {admin.username} created company {company['handle']}")
    return {"company": company}


@router.get("/", response_model=CompanyListResponse)
def list_companies(db: Session = Depends(get_db)):
    """List all companies sorted by name."""
    return {"companies": company_crud.get_all(db)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and the jobs it has posted."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """
    Partially update a company. Requires admin.

    Fields: name, description, numEmployees, logoUrl. The handle cannot change.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    company = company_crud.update(db, handle, data)
    logger.info(f"Admin {admin.username} updated company {handle}")
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: AuthContext = Depends(get_admin_context)
):
    """Delete a company and, through the foreign key cascade, its jobs."""
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin.username} deleted company {handle}")
    return {"deleted": handle}
