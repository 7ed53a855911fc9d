#!/usr/bin/env python3
"""
FastAPI Application Entry Point

Configures the comic aggregator API: settings, logging, the response
cache and its lifecycle, middleware and routes.

Run with:
    uvicorn src.application.app:app
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.application.api.middleware import setup_middleware
from src.application.api.routes.admin import router as admin_router
from src.application.api.routes.health import router as health_router
from src.core.config.constants import HEADER_REQUEST_ID, Stage
from src.core.config.settings import Settings, get_settings
from src.core.exceptions import CacheNotInitializedError, ComicAPIError, ValidationError
from src.core.logging.logger import (
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    set_request_id,
    setup_logging,
)
from src.infrastructure.cache.cache_manager import CacheConfig, CacheManager

logger = get_logger(__name__)


# ============================================================================
# Application Factory
# ============================================================================


def create_app(settings: Settings | None = None, cache: CacheManager | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (default: global settings)
        cache: Pre-built cache (default: built from settings at startup).
               An injected cache is available on app.state immediately,
               so tests can use it without running the lifespan.

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle (startup and shutdown).
        """
        setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

        log_stage(
            logger, Stage.INITIALIZATION, "Starting comic aggregator API",
            environment=settings.app.ENVIRONMENT,
            version=settings.app.APP_VERSION,
        )

        if getattr(app.state, "cache", None) is None:
            app.state.cache = CacheManager(CacheConfig.from_settings(settings))

        try:
            await app.state.cache.start()
            logger.info("Application startup complete")

            yield

        finally:
            log_stage(logger, Stage.SHUTDOWN, "Shutting down application")
            await app.state.cache.stop()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Comic aggregation API with a two-tier in-memory response cache",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.cache = cache

    # ========================================================================
    # MIDDLEWARE REGISTRATION
    # ========================================================================
    # Last added = outermost. setup_middleware registers
    # error handling → CORS → performance → response cache (outer to inner);
    # the request-id middleware below wraps all of them so every log line,
    # including those from the error handler, carries the request id.
    setup_middleware(app, settings)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """
        Inject request ID into all requests for correlation.
        """
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response

        finally:
            clear_request_id()

    # ========================================================================
    # ROUTER REGISTRATION
    # ========================================================================
    # All API endpoints are prefixed with API_BASE_PATH (default: /api/v1)
    # Example URLs:
    # - GET /api/v1/health
    # - GET /api/v1/admin/cache/stats
    base_path = settings.app.API_BASE_PATH

    app.include_router(health_router, prefix=base_path)
    app.include_router(admin_router, prefix=base_path)

    # ========================================================================
    # Root Endpoint
    # ========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    # ========================================================================
    # Exception Handlers
    # ========================================================================

    @app.exception_handler(ComicAPIError)
    async def comic_api_exception_handler(request: Request, exc: ComicAPIError):
        """Handle application exceptions."""
        request_id = exc.request_id or get_request_id() or ""

        if isinstance(exc, ValidationError):
            status_code = 400
        elif isinstance(exc, CacheNotInitializedError):
            status_code = 503
        else:
            status_code = 500

        logger.error(
            f"Application exception: {exc.message}",
            error_type=type(exc).__name__,
            status_code=status_code,
            path=request.url.path,
        )

        content = exc.to_dict()
        content["request_id"] = request_id or None

        return JSONResponse(
            status_code=status_code, content=content, headers={HEADER_REQUEST_ID: request_id}
        )

    return app


# Create application instance
app = create_app()


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "src.application.app:app",
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
