"""
Repository Layer

Data access layer using the repository pattern: each repository turns its
operations into parameterized SQL run through the injected DatabaseManager.
"""

from .base_repository import BaseRepository
from .company_repository import CompanyRepository
from .job_repository import JobRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "JobRepository",
]
