"""
Test Configuration for Jobly

Fixtures for an in-memory SQLite store, repositories bound to it, seeded
companies and jobs, and an HTTP client for the API.
"""

from decimal import Decimal
from typing import Any, Dict, List

import pytest
from httpx import ASGITransport, AsyncClient

from jobly.api.deps import get_db_manager
from jobly.core.database import DatabaseManager
from jobly.main import app
from jobly.repositories import CompanyRepository, JobRepository

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_manager():
    """Fresh in-memory database with tables created."""
    manager = DatabaseManager(TEST_DATABASE_URL, echo=False)
    await manager.init_database()
    await manager.create_tables()
    yield manager
    await manager.close_connections()


@pytest.fixture
def company_repository(db_manager) -> CompanyRepository:
    return CompanyRepository(db_manager)


@pytest.fixture
def job_repository(db_manager) -> JobRepository:
    return JobRepository(db_manager)


@pytest.fixture
def sample_company_data() -> Dict[str, Any]:
    """Valid company data."""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }


@pytest.fixture
async def seeded_companies(company_repository) -> List[Dict[str, Any]]:
    """Three companies, c1..c3, with 1..3 employees."""
    companies = []
    for n in (1, 2, 3):
        companies.append(await company_repository.create({
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        }))
    return companies


@pytest.fixture
async def seeded_jobs(seeded_companies, job_repository) -> List[Dict[str, Any]]:
    """Four jobs at c1 covering positive, zero and missing equity."""
    jobs = []
    for title, salary, equity in (
        ("Job1", 100, Decimal("0.1")),
        ("Job2", 200, Decimal("0.2")),
        ("Job3", 300, Decimal("0")),
        ("Job4", None, None),
    ):
        jobs.append(await job_repository.create({
            "title": title,
            "salary": salary,
            "equity": equity,
            "companyHandle": "c1",
        }))
    return jobs


@pytest.fixture
async def test_client(db_manager):
    """HTTP client for the app, bound to the test database."""
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
