"""
Health check endpoints for the REST API.
Provides basic and detailed health status of the service and its dependencies.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sales_api.core.dependencies import get_cache_service
from shared.config.logging import get_logger
from shared.config.settings import settings
from shared.infrastructure.cache import CacheService
from shared.infrastructure.db import get_db

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": "sales-api",
        "environment": settings.environment,
    }


@router.get("/health/detailed")
def detailed_health_check(
    db: Session = Depends(get_db),
    cache: CacheService = Depends(get_cache_service),
):
    """
    Detailed health check that verifies the database connection and
    reports cache statistics.

    Returns 503 Service Unavailable if the database is down.
    """
    checks = {
        "service": "sales-api",
        "environment": settings.environment,
        "dependencies": {},
    }

    try:
        db.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
        healthy = True
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        healthy = False

    stats = getattr(cache, "stats", None)
    checks["dependencies"]["cache"] = stats() if callable(stats) else {"enabled": cache.is_enabled}

    checks["status"] = "healthy" if healthy else "degraded"

    if not healthy:
        return JSONResponse(content=checks, status_code=503)

    return checks
