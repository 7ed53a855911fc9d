"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# ============================================================================
# Time Control
# ============================================================================


class FakeClock:
    """
    Manually advanced clock for deterministic TTL and LRU tests.

    Passed to CacheManager(clock=...) in place of time.time.
    """

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


@pytest.fixture
def clock():
    """Fresh fake clock, starting at a fixed POSIX time."""
    return FakeClock()


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def cache_config():
    """
    Small cache configuration.

    max_size=10 puts the L1 admission threshold at 8 entries and the
    pressure threshold at 9.
    """
    from src.infrastructure.cache.cache_manager import CacheConfig

    return CacheConfig(
        max_size=10,
        default_ttl=60,
        cleanup_interval=0.01,
        compression_enabled=True,
        compression_threshold=64,
    )


@pytest.fixture
def cache_manager(cache_config, clock):
    """CacheManager driven by the fake clock."""
    from src.infrastructure.cache.cache_manager import CacheManager

    return CacheManager(cache_config, clock=clock)


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """
    Real Settings instance with test values (no .env lookup).
    """
    from src.core.config.settings import Settings

    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        APP_VERSION="1.0.0-test",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
        CACHE_MAX_SIZE=10,
        CACHE_DEFAULT_TTL=60,
        CACHE_CLEANUP_INTERVAL=60,
        CACHE_COMPRESSION_THRESHOLD=64,
    )
