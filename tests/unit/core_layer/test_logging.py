"""
Unit Tests for Logging Module

Tests logger configuration, request context, processors and log_stage.
"""

from unittest.mock import MagicMock

import pytest

from src.core.config.constants import Stage
from src.core.logging.logger import (
    add_log_level_name,
    add_request_id,
    add_timestamp,
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    normalize_stage,
    set_request_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def clean_request_context():
    clear_request_id()
    yield
    clear_request_id()


@pytest.mark.unit
class TestLoggerCreation:
    """Test logger creation and configuration."""

    def test_get_logger_returns_logger_instance(self):
        logger = get_logger(__name__)

        assert logger is not None
        assert hasattr(logger, "info")

    @pytest.mark.parametrize("log_format", ["json", "console"])
    def test_setup_logging_accepts_both_formats(self, log_format):
        setup_logging(log_level="WARNING", log_format=log_format)

        get_logger("test").warning("configured", stage=Stage.INITIALIZATION)


@pytest.mark.unit
class TestRequestContext:
    """Test request ID context management."""

    def test_set_and_get_request_id(self):
        set_request_id("req-123")

        assert get_request_id() == "req-123"

    def test_clear_request_id(self):
        set_request_id("req-123")

        clear_request_id()

        assert get_request_id() is None


@pytest.mark.unit
class TestProcessors:
    """Test the structlog processors."""

    def test_add_request_id_injects_context(self):
        set_request_id("req-abc")

        event = add_request_id(None, "info", {"event": "x"})

        assert event["request_id"] == "req-abc"

    def test_add_request_id_without_context(self):
        event = add_request_id(None, "info", {"event": "x"})

        assert "request_id" not in event

    def test_add_timestamp_is_utc_iso(self):
        event = add_timestamp(None, "info", {"event": "x"})

        assert event["timestamp"].endswith("Z")
        assert "T" in event["timestamp"]

    def test_normalize_stage_renders_enum_value(self):
        event = normalize_stage(None, "info", {"stage": Stage.CACHE_LOOKUP})

        assert event["stage"] == "2.0_CACHE_LOOKUP"
        assert type(event["stage"]) is str

    def test_normalize_stage_leaves_strings(self):
        event = normalize_stage(None, "info", {"stage": "custom"})

        assert event["stage"] == "custom"

    def test_add_log_level_name_uppercases(self):
        event = add_log_level_name(None, "info", {"level": "warning"})

        assert event["level"] == "WARNING"


@pytest.mark.unit
class TestLogStage:
    """Test log_stage helper."""

    def test_log_stage_uses_requested_level(self):
        logger = MagicMock()

        log_stage(logger, Stage.CACHE_EVICTION, "Evicted", level="debug", cache_key="k")

        logger.debug.assert_called_once_with("Evicted", stage=Stage.CACHE_EVICTION, cache_key="k")

    def test_log_stage_defaults_to_info(self):
        logger = MagicMock()

        log_stage(logger, Stage.CACHE_INVALIDATION, "Cache cleared", removed=3)

        logger.info.assert_called_once_with("Cache cleared", stage=Stage.CACHE_INVALIDATION, removed=3)
