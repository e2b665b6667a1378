"""Health check endpoints."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from reading_plan.api.dependencies import get_app_settings
from reading_plan.config import Settings
from reading_plan.database.connection import check_connection
from reading_plan.utils.logging import get_logger

logger = get_logger("health")

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(settings: Settings = Depends(get_app_settings)):
    """
    Health check endpoint.

    Returns basic service health status without touching the database.
    """
    logger.debug("Health check requested")
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "environment": settings.environment.value,
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
async def readiness_check(request: Request, settings: Settings = Depends(get_app_settings)):
    """
    Readiness check endpoint.

    Returns 503 if the database cannot be reached.
    """
    logger.debug("Readiness check requested")

    engine = getattr(request.app.state, "db_engine", None)
    checks = {"database": engine is not None and await check_connection(engine)}

    body = {
        "status": "ready" if all(checks.values()) else "not_ready",
        "app_name": settings.app_name,
        "environment": settings.environment.value,
        "checks": checks,
    }
    if not all(checks.values()):
        logger.warning(f"Readiness check failed: {checks}")
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
