"""
Job API v1 Endpoints

Simple RESTful API endpoints for job management.
"""

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from jobly.api.deps import get_job_repository
from jobly.repositories import JobRepository
from jobly.schemas.job import (
    JobCreate,
    JobDetailResponse,
    JobResponse,
    JobSearchParams,
    JobUpdate,
)
from jobly.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    repository: JobRepository = Depends(get_job_repository),
):
    """Create a new job."""
    return await repository.create(job_data.model_dump(by_alias=True))


@router.get("/", response_model=List[JobResponse])
async def list_jobs(
    title: Optional[str] = Query(None),
    min_salary: Optional[int] = Query(None, ge=0, alias="minSalary"),
    equity: Optional[bool] = Query(None),
    repository: JobRepository = Depends(get_job_repository),
):
    """
    List jobs with optional filters.

    ``equity=true`` keeps jobs with positive equity, ``equity=false`` keeps
    jobs with zero equity; without it equity is not filtered.
    """
    search_params = JobSearchParams(title=title, min_salary=min_salary, equity=equity)
    return await repository.search(search_params.to_criteria())


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: int,
    repository: JobRepository = Depends(get_job_repository),
):
    """Get job by ID."""
    return await repository.get(job_id)


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    job_data: JobUpdate,
    repository: JobRepository = Depends(get_job_repository),
):
    """Partially update a job."""
    return await repository.update(job_id, job_data.to_fields())


@router.delete("/{job_id}")
async def delete_job(
    job_id: int,
    repository: JobRepository = Depends(get_job_repository),
) -> Dict[str, int]:
    """Delete a job."""
    await repository.remove(job_id)
    logger.info("Job deleted", job_id=job_id)
    return {"deleted": job_id}
