"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the comic aggregator response cache service.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for magic numbers
- Type-safe enums for tier and stage identifiers
- Easy to update and track changes
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Cache processing stages used as the ``stage`` field of log events.

    Format: {SEQUENCE}_{DESCRIPTIVE_NAME}

    Examples:
        log_stage(logger, Stage.CACHE_LOOKUP, "L1 cache hit", cache_key="...")
    """

    INITIALIZATION = "0.0_INITIALIZATION"
    KEY_DERIVATION = "1.0_KEY_DERIVATION"
    CACHE_LOOKUP = "2.0_CACHE_LOOKUP"
    CACHE_PROMOTION = "2.1_CACHE_PROMOTION"
    CACHE_POPULATION = "2.2_CACHE_POPULATION"
    CACHE_EVICTION = "2.3_CACHE_EVICTION"
    CACHE_INVALIDATION = "2.4_CACHE_INVALIDATION"
    CACHE_EXPIRY = "2.5_CACHE_EXPIRY"
    CACHE_WARMING = "2.6_CACHE_WARMING"
    CODEC = "C_PAYLOAD_CODEC"
    SHUTDOWN = "6.0_SHUTDOWN"


# ============================================================================
# Cache Tiers
# ============================================================================


class CacheLevel(str, Enum):
    """
    Multi-tier caching levels.

    L1: Primary in-memory tier, consulted first
    L2: Secondary in-memory tier, receives demoted entries
    """

    L1 = "l1"
    L2 = "l2"


class CacheStatus(str, Enum):
    """Value of the cache-status response header."""

    HIT = "HIT"
    MISS = "MISS"


# ============================================================================
# Cache Defaults
# ============================================================================

DEFAULT_TTL_SECONDS = 300  # 5 minutes
DEFAULT_MAX_SIZE = 1000  # Maximum entries per tier
DEFAULT_CLEANUP_INTERVAL = 60  # Expiry sweep interval (seconds)
DEFAULT_COMPRESSION_THRESHOLD = 1024  # Bytes of serialized payload

# New entries go straight to L2 once L1 is this full
L1_ADMISSION_THRESHOLD = 0.8
# The sweeper evicts proactively when L1 stays above this after a pass
L1_PRESSURE_THRESHOLD = 0.9

# Query parameters that never take part in a cache key
VOLATILE_QUERY_PARAMS = frozenset({"_t", "timestamp", "nocache"})

# Longest key prefix written to log events
LOG_KEY_PREVIEW_LENGTH = 80

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_CACHE_STATUS = "X-Cache"
HEADER_REQUEST_ID = "X-Request-ID"
HEADER_RESPONSE_TIME = "X-Response-Time"

# ============================================================================
# Performance Thresholds
# ============================================================================

SLOW_REQUEST_THRESHOLD = 1.0  # Seconds before a request is logged as slow
