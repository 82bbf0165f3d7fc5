"""
Health check routes for monitoring and service discovery.
Provides endpoints to verify service health and database connectivity.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from clubhub.api.deps import SessionDep
from clubhub.core.config import settings
from clubhub.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict:
    """
    Basic health check endpoint.
    Returns service status and version information.
    """
    return {
        "success": True,
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
    }


@router.get("/health/db")
def database_health_check(session: SessionDep):
    """
    Database health check endpoint.
    Verifies database connectivity by executing a simple query.
    """
    try:
        result = session.connection().execute(text("SELECT 1")).scalar()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "status": "unhealthy", "database": "error"},
        )

    return {
        "success": True,
        "status": "healthy",
        "database": "ok",
        "result": int(result) if result is not None else 1,
    }
