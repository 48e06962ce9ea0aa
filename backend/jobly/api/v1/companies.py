"""
Company API v1 Endpoints

RESTful endpoints for company management. Each handler delegates to
CompanyRepository; application errors are translated by the handlers
registered in jobly.api.errors.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from jobly.api.deps import get_company_repository
from jobly.repositories import CompanyRepository
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailResponse,
    CompanyResponse,
    CompanySearchParams,
    CompanyUpdate,
)
from jobly.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("/", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    company_data: CompanyCreate,
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Create a new company."""
    return await repository.create(company_data.model_dump(by_alias=True))


@router.get("/", response_model=List[CompanyResponse])
async def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike"),
    min_employees: Optional[int] = Query(None, ge=0, alias="minEmployees"),
    max_employees: Optional[int] = Query(None, ge=0, alias="maxEmployees"),
    repository: CompanyRepository = Depends(get_company_repository),
):
    """List companies, optionally filtered by name and employee count."""
    search_params = CompanySearchParams(
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return await repository.search(search_params.to_criteria())


@router.get("/{handle}", response_model=CompanyDetailResponse)
async def get_company(
    handle: str,
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Get a company with its jobs."""
    return await repository.get(handle)


@router.patch("/{handle}", response_model=CompanyResponse)
async def update_company(
    handle: str,
    company_data: CompanyUpdate,
    repository: CompanyRepository = Depends(get_company_repository),
):
    """Partially update a company."""
    return await repository.update(handle, company_data.to_fields())


@router.delete("/{handle}")
async def delete_company(
    handle: str,
    repository: CompanyRepository = Depends(get_company_repository),
) -> Dict[str, str]:
    """Delete a company."""
    await repository.remove(handle)
    logger.info("Company deleted", handle=handle)
    return {"deleted": handle}
