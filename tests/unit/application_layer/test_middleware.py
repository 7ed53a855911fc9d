"""
Unit Tests for Performance Monitoring and Error Handling Middleware
"""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.application.api.middleware.error_handler import ErrorHandlingMiddleware
from src.application.api.middleware.performance_monitor import PerformanceMonitoringMiddleware


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("scraper exploded")

    return app


@pytest.mark.unit
class TestPerformanceMonitoringMiddleware:
    """Test request timing."""

    def test_adds_response_time_header(self):
        app = build_app()
        app.add_middleware(PerformanceMonitoringMiddleware)

        response = TestClient(app).get("/ok")

        assert response.status_code == 200
        assert response.headers["X-Response-Time"].endswith("s")
        assert float(response.headers["X-Response-Time"][:-1]) >= 0

    def test_slow_requests_are_logged(self):
        app = build_app()
        app.add_middleware(PerformanceMonitoringMiddleware, slow_threshold=0.0)

        with patch("src.application.api.middleware.performance_monitor.logger") as mock_logger:
            TestClient(app).get("/ok")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["path"] == "/ok"

    def test_fast_requests_are_not_logged(self):
        app = build_app()
        app.add_middleware(PerformanceMonitoringMiddleware, slow_threshold=60.0)

        with patch("src.application.api.middleware.performance_monitor.logger") as mock_logger:
            TestClient(app).get("/ok")

        mock_logger.warning.assert_not_called()


@pytest.mark.unit
class TestErrorHandlingMiddleware:
    """Test the catch-all error handler."""

    def test_unhandled_exception_becomes_500(self):
        app = build_app()
        app.add_middleware(ErrorHandlingMiddleware)

        response = TestClient(app).get("/boom")

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "internal_server_error"
        assert data["error_type"] == "RuntimeError"
        assert "traceback" not in data
        assert "scraper exploded" not in response.text

    def test_traceback_included_when_enabled(self):
        app = build_app()
        app.add_middleware(ErrorHandlingMiddleware, include_traceback=True)

        data = TestClient(app).get("/boom").json()

        assert "RuntimeError" in data["traceback"]
        assert data["detail"] == "scraper exploded"

    def test_successful_requests_pass_through(self):
        app = build_app()
        app.add_middleware(ErrorHandlingMiddleware)

        response = TestClient(app).get("/ok")

        assert response.status_code == 200
        assert response.json() == {"ok": True}
