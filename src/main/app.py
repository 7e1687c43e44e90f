"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.domain.entities.errors import DomainError
from src.main.config import get_settings
from src.main.container import app_lifespan, init_container
from src.presentation.controllers import (
    case_router,
    chat_router,
    monitor_router,
    system_router,
)
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
# This ensures we have logging during the configuration loading process
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

# Get structured logger
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    This context manager is called when the application starts up,
    and when it shuts down. It uses the container's app_lifespan
    to properly manage application resources.
    """
    # Set application startup time
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    # Use container's lifecycle management
    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.warning(
        "request.domain_error",
        path=request.url.path,
        error=exc.message,
        details=exc.details,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message}
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_error", path=request.url.path, error=str(exc), exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"An error occurred: {exc}"},
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    # Initialize dependency injection container
    init_container(settings)

    # Create FastAPI app
    app = FastAPI(
        title=settings.ge.title,
        description=settings.ge.description,
        version=settings.ge.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(case_router)
    app.include_router(chat_router)
    app.include_router(monitor_router)
    app.include_router(system_router)

    return app


app = create_app()
