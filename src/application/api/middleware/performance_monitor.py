"""
Performance Monitoring Middleware
=================================

Measures how long each request takes, logs slow requests and reports the
duration to clients in the ``X-Response-Time`` header.

The measurement covers everything registered inside this middleware: when
it wraps the response cache, cache hits are timed too; when the response
cache wraps it, hits short-circuit before timing starts.
"""

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.config.constants import HEADER_RESPONSE_TIME, SLOW_REQUEST_THRESHOLD
from src.core.logging.logger import get_logger

logger = get_logger(__name__)


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    Middleware for monitoring request performance and detecting slow requests.
    """

    def __init__(self, app, slow_threshold: float = SLOW_REQUEST_THRESHOLD):
        """
        Args:
            app: The ASGI application
            slow_threshold: Threshold in seconds for logging slow requests
        """
        super().__init__(app)
        self.slow_threshold = slow_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # perf_counter is monotonic, unaffected by wall-clock changes
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time

        if duration > self.slow_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                method=request.method,
                path=request.url.path,
                duration_seconds=round(duration, 4),
                threshold_seconds=self.slow_threshold,
            )

        response.headers[HEADER_RESPONSE_TIME] = f"{duration:.4f}s"
        return response


def add_performance_monitoring_middleware(app, slow_threshold: float = SLOW_REQUEST_THRESHOLD):
    """
    Add performance monitoring middleware to the FastAPI application.

    USAGE:
    ------
        app = FastAPI()
        add_performance_monitoring_middleware(app, slow_threshold=0.5)
    """
    app.add_middleware(PerformanceMonitoringMiddleware, slow_threshold=slow_threshold)
    logger.info("Performance monitoring middleware registered", slow_threshold=slow_threshold)
