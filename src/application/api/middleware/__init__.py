"""
Middleware Package
==================

HTTP middleware for the comic aggregator API.

AVAILABLE MIDDLEWARE:
---------------------
1. error_handler: Catch-all for unexpected exceptions (generic 500 body)
2. performance_monitor: Request duration header + slow request warnings
3. response_cache: Serve repeated GET requests from the CacheManager

MIDDLEWARE ORDERING:
--------------------
Starlette wraps the application in reverse registration order: the LAST
middleware added is the OUTERMOST one. Request flow for this service:

    Client → ErrorHandling → CORS → PerformanceMonitoring → ResponseCache → Route

so cache hits are timed by the performance monitor and every failure,
including one inside the cache middleware, reaches the error handler.

USAGE EXAMPLE:
--------------
    from fastapi import FastAPI
    from src.application.api.middleware import setup_middleware

    app = FastAPI()
    setup_middleware(app, settings)
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.core.config.settings import Settings, get_settings
from src.core.logging.logger import get_logger
from src.infrastructure.cache.cache_manager import CacheManager

from .error_handler import ErrorHandlingMiddleware, add_error_handling_middleware
from .performance_monitor import (
    PerformanceMonitoringMiddleware,
    add_performance_monitoring_middleware,
)
from .response_cache import ResponseCacheMiddleware, add_response_cache_middleware

logger = get_logger(__name__)


def setup_middleware(
    app: FastAPI,
    settings: Settings | None = None,
    cache: CacheManager | None = None,
):
    """
    Register all middleware components in the correct order.

    Registration runs innermost first (see module docstring).

    Args:
        app: FastAPI application instance
        settings: Settings to read (default: global settings)
        cache: Cache for the response cache middleware
               (default: resolved from app.state.cache per request)
    """
    settings = settings or get_settings()

    logger.info("Registering middleware components...")

    # 1. Response cache (innermost, wraps the routes directly)
    if settings.cache.ENABLE_CACHING:
        add_response_cache_middleware(
            app,
            cache=cache,
            ttl=settings.cache.CACHE_DEFAULT_TTL,
            excluded_paths=settings.cache.CACHE_EXCLUDED_PATHS,
        )

    # 2. Performance monitoring (times cache hits and misses alike)
    add_performance_monitoring_middleware(app, slow_threshold=settings.app.SLOW_REQUEST_THRESHOLD)

    # 3. CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Cache", "X-Request-ID", "X-Response-Time"],
    )

    # 4. Error handling (outermost)
    add_error_handling_middleware(
        app, include_traceback=(settings.app.ENVIRONMENT == "development")
    )

    logger.info("All middleware components registered successfully")


__all__ = [
    "setup_middleware",
    "ErrorHandlingMiddleware",
    "PerformanceMonitoringMiddleware",
    "ResponseCacheMiddleware",
    "add_error_handling_middleware",
    "add_performance_monitoring_middleware",
    "add_response_cache_middleware",
]
