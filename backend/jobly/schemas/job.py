"""
Job Pydantic Schemas

Request/response models for job-related API endpoints.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobCreate(BaseModel):
    """Schema for creating a new job."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1, description="Job title")
    salary: Optional[int] = Field(None, ge=0, description="Salary")
    equity: Optional[Decimal] = Field(None, ge=0, le=1, description="Equity fraction")
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle", description="Company handle")


class JobUpdate(BaseModel):
    """Schema for partially updating a job; id and company cannot change."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, description="Job title")
    salary: Optional[int] = Field(None, ge=0, description="Salary")
    equity: Optional[Decimal] = Field(None, ge=0, le=1, description="Equity fraction")

    def to_fields(self) -> Dict[str, Any]:
        """Only the fields the client sent."""
        return self.model_dump(exclude_unset=True)


class JobResponse(BaseModel):
    """Schema for job response."""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="Job ID")
    title: str = Field(..., description="Job title")
    salary: Optional[int] = Field(None, description="Salary")
    equity: Optional[str] = Field(None, description="Equity fraction as a decimal string")
    company_handle: str = Field(..., alias="companyHandle", description="Company handle")


class JobCompany(BaseModel):
    """Company summary nested in a job detail."""

    model_config = ConfigDict(populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class JobDetailResponse(JobResponse):
    """Job with the company that posted it."""

    companies: List[JobCompany] = Field(default_factory=list, description="Owning company")


class JobSearchParams(BaseModel):
    """Schema for job search parameters."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, description="Case-insensitive title fragment")
    min_salary: Optional[int] = Field(None, ge=0, alias="minSalary", description="Minimum salary")
    equity: Optional[bool] = Field(
        None,
        description="True: only jobs with equity; False: only jobs without; omitted: all jobs",
    )

    def to_criteria(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)
