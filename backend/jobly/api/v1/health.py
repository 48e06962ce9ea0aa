"""
Health Check API v1 Endpoints

System health and status monitoring endpoints.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from jobly.api.deps import get_db_manager
from jobly.core.config import get_settings
from jobly.core.database import DatabaseManager
from jobly.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("/")
async def health_check(
    db_manager: DatabaseManager = Depends(get_db_manager),
) -> Dict[str, Any]:
    """Health check including a round trip to the database."""
    settings = get_settings()
    try:
        await db_manager.execute("SELECT 1 AS ok")
    except Exception as e:
        logger.error("Health check failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )

    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
