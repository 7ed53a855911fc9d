"""
Unit Tests for Configuration Constants

Tests the configuration constants and enums.
"""

import pytest

from src.core.config.constants import (
    DEFAULT_CLEANUP_INTERVAL,
    DEFAULT_COMPRESSION_THRESHOLD,
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    HEADER_CACHE_STATUS,
    L1_ADMISSION_THRESHOLD,
    L1_PRESSURE_THRESHOLD,
    VOLATILE_QUERY_PARAMS,
    CacheLevel,
    CacheStatus,
    Stage,
)


@pytest.mark.unit
class TestCacheConstants:
    """Test cache defaults and thresholds."""

    def test_defaults(self):
        assert DEFAULT_TTL_SECONDS == 300
        assert DEFAULT_MAX_SIZE == 1000
        assert DEFAULT_CLEANUP_INTERVAL == 60
        assert DEFAULT_COMPRESSION_THRESHOLD == 1024

    def test_admission_threshold_below_pressure_threshold(self):
        assert 0 < L1_ADMISSION_THRESHOLD < L1_PRESSURE_THRESHOLD < 1

    def test_volatile_params(self):
        assert VOLATILE_QUERY_PARAMS == {"_t", "timestamp", "nocache"}


@pytest.mark.unit
class TestEnums:
    """Test enum values used on the wire and in logs."""

    def test_cache_levels_serialize_as_strings(self):
        assert CacheLevel("l1") is CacheLevel.L1
        assert CacheLevel.L2 == "l2"

    def test_cache_status_header(self):
        assert HEADER_CACHE_STATUS == "X-Cache"
        assert {status.value for status in CacheStatus} == {"HIT", "MISS"}

    def test_stage_values_are_unique(self):
        values = [stage.value for stage in Stage]

        assert len(set(values)) == len(values)
