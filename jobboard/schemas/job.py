from pydantic import BaseModel, Field
from typing import List, Optional

# Decimal string in [0, 1]; numbers are rejected so no float rounding sneaks in
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., alias="companyHandle", min_length=1, max_length=25)

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    Only salary and equity can change; title and companyHandle are fixed
    once a job exists.
    """
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)

    class Config:
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        populate_by_name = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: str
