"""
DeckGen API - Main application entry point.
"""
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from structlog.contextvars import bind_contextvars, clear_contextvars

from app.api.v1.router import api_router
from app.core.config import Settings, get_settings
from app.core.dependencies import ServiceContainer
from app.core.exceptions import DeckGenException
from app.core.logging import get_logger, log_error_details, log_request_details, setup_logging

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    services: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings, loaded from the environment if omitted
        services: Prebuilt services, built from settings at startup if omitted
    """
    settings = settings or get_settings()
    setup_logging(settings)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            environment=settings.SENTRY_ENVIRONMENT or settings.ENVIRONMENT,
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        """
        logger.info(
            "Starting DeckGen API",
            version=settings.APP_VERSION,
            environment=settings.ENVIRONMENT,
        )
        app.state.services = services or ServiceContainer.build(settings)

        yield

        logger.info("Shutting down DeckGen API")
        await app.state.services.close()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.APP_VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json" if not settings.is_production else None,
        docs_url=f"{settings.API_V1_PREFIX}/docs" if not settings.is_production else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Bind a request ID to the logging context and log timing."""
        request_id = request.headers.get("X-Request-ID", str(time.time_ns()))
        clear_contextvars()
        bind_contextvars(request_id=request_id)

        start_time = time.time()
        logger.info(
            "Request started",
            **log_request_details(
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                client_ip=request.client.host if request.client else None,
            ),
        )

        response = await call_next(request)

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(DeckGenException)
    async def deckgen_exception_handler(request: Request, exc: DeckGenException):
        """Map domain errors to their HTTP status."""
        logger.error("Request failed", **log_error_details(exc, path=request.url.path))
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "details": exc.details},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle all unhandled exceptions."""
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )

        # Don't expose internal errors in production
        if settings.is_production:
            return JSONResponse(
                status_code=500,
                content={"error": "An internal error occurred"},
            )

        return JSONResponse(
            status_code=500,
            content={"error": "An internal error occurred", "details": str(exc)},
        )

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    settings.IMAGES_DIR.mkdir(parents=True, exist_ok=True)
    app.mount("/images", StaticFiles(directory=settings.IMAGES_DIR), name="images")

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """
        Root endpoint.

        Returns:
            API information
        """
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": f"{settings.API_V1_PREFIX}/docs" if not settings.is_production else "Disabled in production",
        }

    return app
