"""FastAPI application entry point.

This module creates and configures the FastAPI application instance with:
- Middleware (CORS, request context)
- Exception handlers
- API routers (v1 and the /bible export route)
- Health check endpoints (/health, /ready)
- Startup/shutdown lifecycle management (database engine)
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reading_plan import __version__
from reading_plan.api.dependencies import get_app_settings
from reading_plan.api.v1 import health
from reading_plan.api.v1.plans import legacy_router
from reading_plan.api.v1.router import router as v1_router
from reading_plan.config import Settings, get_settings
from reading_plan.database.connection import close_engine, init_engine
from reading_plan.database.session import get_session_factory, reset_session_factory
from reading_plan.middleware import RequestContextMiddleware
from reading_plan.utils.errors import ReadingPlanException
from reading_plan.utils.logging import get_logger, log_error, setup_logging

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the database engine on startup and disposes of it on shutdown.
    """
    settings: Settings = app.state.settings
    logger.info("Starting Reading Plan service...")

    engine = init_engine(settings.database)
    get_session_factory(engine)
    app.state.db_engine = engine
    logger.info("Reading Plan service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down Reading Plan service...")
        reset_session_factory()
        await close_engine()
        app.state.db_engine = None
        logger.info("Reading Plan service shut down")


async def reading_plan_exception_handler(request: Request, exc: ReadingPlanException):
    """Handle ReadingPlanException."""
    log_error(exc, context={"path": request.url.path, "method": request.method})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    log_error(exc, context={"path": request.url.path, "method": request.method})
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "code": "HTTP_ERROR",
                "status_code": exc.status_code,
            }
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors."""
    log_error(exc, context={"path": request.url.path, "method": request.method})
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "message": "Validation error",
                "code": "VALIDATION_ERROR",
                "status_code": 422,
                "details": jsonable_encoder(exc.errors()),
            }
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions."""
    log_error(exc, context={"path": request.url.path, "method": request.method})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "message": "Internal server error",
                "code": "INTERNAL_ERROR",
                "status_code": 500,
            }
        },
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application around an explicit settings object."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Reading Plan Service",
        description="Splits the Bible into evenly sized daily reading portions",
        version=__version__,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db_engine = None

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    app.add_exception_handler(ReadingPlanException, reading_plan_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(v1_router)
    app.include_router(legacy_router)

    # Root-level health checks for orchestrators; also under /api/v1
    app.add_api_route("/health", health.health_check, methods=["GET"], include_in_schema=False)
    app.add_api_route("/ready", health.readiness_check, methods=["GET"], include_in_schema=False)

    @app.get("/", tags=["root"])
    async def root(app_settings: Settings = Depends(get_app_settings)):
        """Root endpoint."""
        return {
            "service": "reading-plan",
            "version": __version__,
            "status": "running",
            "environment": app_settings.environment.value,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "reading_plan.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload and settings.is_development,
        log_level=settings.log_level.lower(),
    )
