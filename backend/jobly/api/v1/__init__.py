"""
API v1 Package

Contains all version 1 API endpoints for the Jobly application.
"""

from .companies import router as companies_router
from .jobs import router as jobs_router
from .health import router as health_router

__all__ = [
    "companies_router",
    "jobs_router",
    "health_router",
]
