"""
API Dependencies

Dependencies shared across endpoints: the application's DatabaseManager and
the repositories bound to it.
"""

from fastapi import Depends, Request

from jobly.core.database import DatabaseManager
from jobly.repositories import CompanyRepository, JobRepository


def get_db_manager(request: Request) -> DatabaseManager:
    """
    Database manager dependency.

    The manager is created and closed by the application lifespan.
    """
    return request.app.state.db_manager


def get_company_repository(
    db_manager: DatabaseManager = Depends(get_db_manager),
) -> CompanyRepository:
    return CompanyRepository(db_manager)


def get_job_repository(
    db_manager: DatabaseManager = Depends(get_db_manager),
) -> JobRepository:
    return JobRepository(db_manager)
