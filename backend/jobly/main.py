"""
FastAPI Main Application

Entry point for the Jobly API server.
Configures routing, middleware, and application lifecycle events.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobly.api.errors import register_exception_handlers
from jobly.api.v1 import companies_router, health_router, jobs_router
from jobly.core.config import get_settings
from jobly.core.database import DatabaseManager
from jobly.middleware.request_logging import RequestLoggingMiddleware
from jobly.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)

# Get application settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager; owns the DatabaseManager."""
    # Startup
    logger.info("Starting Jobly API...")
    db_manager = DatabaseManager()
    await db_manager.init_database()
    await db_manager.create_tables()
    app.state.db_manager = db_manager

    yield

    # Shutdown
    logger.info("Shutting down Jobly API...")
    await db_manager.close_connections()
    logger.info("Application shutdown complete")


# Create FastAPI application instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Companies and the jobs they post, with filtered search",
    version=settings.VERSION,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware, exclude_paths=["/api/v1/health/"])

# Include API routers
app.include_router(health_router, prefix="/api/v1")
app.include_router(companies_router, prefix="/api/v1")
app.include_router(jobs_router, prefix="/api/v1")

register_exception_handlers(app)


@app.get("/")
async def root() -> Dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "message": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "running",
        "endpoints": {
            "health": "/api/v1/health",
            "companies": "/api/v1/companies",
            "jobs": "/api/v1/jobs",
        },
    }


def run() -> None:
    """Run the API server with uvicorn."""
    uvicorn.run(
        "jobly.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
