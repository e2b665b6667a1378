"""API v1 router aggregation."""

from fastapi import APIRouter

from reading_plan.api.v1 import health, plans

router = APIRouter(
    prefix="/api/v1",
    tags=["v1"],
    responses={
        400: {"description": "Invalid day count"},
        422: {"description": "Validation error"},
        500: {"description": "Internal server error"},
    },
)

router.include_router(health.router)
router.include_router(plans.router)


@router.get(
    "/",
    summary="API Information",
    description="Get API version and status information",
    tags=["v1"],
)
async def api_info():
    """Get API v1 information."""
    return {
        "version": "v1",
        "status": "active",
        "service": "reading-plan",
        "endpoints": {
            "health": "/api/v1/health",
            "ready": "/api/v1/ready",
            "plans": "/api/v1/plans",
            "export": "/api/v1/plans/export",
        },
    }
