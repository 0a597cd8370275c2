from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update (handle cannot change)"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    @field_validator("name", "description")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """name and description may be left out but not cleared"""
        if v is None:
            raise ValueError("cannot be null")
        return v

    class Config:
        populate_by_name = True
        extra = "forbid"


class CompanyJob(BaseModel):
    """A job as listed under its company"""
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(BaseModel):
    deleted: str
