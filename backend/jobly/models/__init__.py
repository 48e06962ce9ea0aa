"""
Database Models Package

Contains SQLAlchemy table definitions for the Jobly application.
"""

from jobly.core.database import Base
from jobly.models.company import Company
from jobly.models.job import Job

__all__ = [
    "Base",
    "Company",
    "Job",
]
