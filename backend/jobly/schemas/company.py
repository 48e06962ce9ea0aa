"""
Company Pydantic Schemas

Request/response models for company-related API endpoints. Field names are
snake_case in Python and camelCase on the wire.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobly.schemas.job import JobResponse


class CompanyBase(BaseModel):
    """Base company schema with common fields."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Company name")
    description: str = Field(..., description="Company description")
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees", description="Employee count")
    logo_url: Optional[str] = Field(None, alias="logoUrl", description="Company logo URL")


class CompanyCreate(CompanyBase):
    """Schema for creating a new company."""

    handle: str = Field(
        ...,
        min_length=1,
        max_length=25,
        pattern=r"^[a-z0-9_-]+$",
        description="Unique lower-case company handle",
    )


class CompanyUpdate(BaseModel):
    """Schema for partially updating a company; the handle cannot change."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    name: Optional[str] = Field(None, min_length=1, description="Company name")
    description: Optional[str] = Field(None, description="Company description")
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees", description="Employee count")
    logo_url: Optional[str] = Field(None, alias="logoUrl", description="Company logo URL")

    def to_fields(self) -> Dict[str, Any]:
        """Only the fields the client sent, keyed by wire name."""
        return self.model_dump(exclude_unset=True, by_alias=True)


class CompanyResponse(BaseModel):
    """Schema for company response."""

    model_config = ConfigDict(populate_by_name=True)

    handle: str = Field(..., description="Company handle")
    name: str = Field(..., description="Company name")
    description: str = Field(..., description="Company description")
    num_employees: Optional[int] = Field(None, alias="numEmployees", description="Employee count")
    logo_url: Optional[str] = Field(None, alias="logoUrl", description="Company logo URL")


class CompanyDetailResponse(CompanyResponse):
    """Company with its job postings."""

    jobs: List[JobResponse] = Field(default_factory=list, description="Jobs posted by the company")


class CompanySearchParams(BaseModel):
    """Schema for company search parameters."""

    model_config = ConfigDict(populate_by_name=True)

    name_like: Optional[str] = Field(None, alias="nameLike", description="Case-insensitive name fragment")
    min_employees: Optional[int] = Field(None, ge=0, alias="minEmployees", description="Minimum employees")
    max_employees: Optional[int] = Field(None, ge=0, alias="maxEmployees", description="Maximum employees")

    def to_criteria(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, by_alias=True)
