"""
Admin API Models
================

Pydantic request/response models for the cache admin endpoints.

Response models give the admin surface:
1. **Validation**: Outgoing data is checked against the declared shape
2. **Documentation**: OpenAPI schemas in /docs
3. **Contract Enforcement**: Changes to the cache's stats dict that break
   the API fail loudly in tests instead of silently in dashboards
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.core.config.constants import CacheLevel

# ============================================================================
# NESTED MODELS: Composable Response Components
# ============================================================================


class TierStats(BaseModel):
    """Occupancy of one cache tier."""

    size: int = Field(..., ge=0, description="Entries currently held")
    max_size: int = Field(..., ge=1, description="Configured entry bound")
    expired: int = Field(..., ge=0, description="Held entries already past their expiry")
    active: int = Field(..., ge=0, description="Held entries still live")


class TotalStats(BaseModel):
    """Totals across both tiers (an L2 shadow of an L1 key counts in both)."""

    size: int = Field(..., ge=0)
    expired: int = Field(..., ge=0)
    active: int = Field(..., ge=0)
    estimated_bytes: int = Field(
        ..., ge=0, description="Serialized size of distinct entries (stored size when compressed)"
    )


class PerformanceStats(BaseModel):
    """
    Cumulative cache counters.

    CACHE HIT RATE:
    ---------------
    hit_rate = hits / (hits + misses) * 100, rounded to 2 decimals.
    A lookup that finds an expired entry counts as a miss.
    """

    hits: int = Field(default=0, ge=0)
    misses: int = Field(default=0, ge=0)
    sets: int = Field(default=0, ge=0)
    deletes: int = Field(default=0, ge=0)
    evictions: int = Field(default=0, ge=0)
    expirations: int = Field(default=0, ge=0)
    compressions: int = Field(default=0, ge=0)
    decompressions: int = Field(default=0, ge=0)
    skipped_compressions: int = Field(default=0, ge=0)
    hit_rate: float = Field(default=0.0, ge=0, le=100, description="Hit rate percentage")


class WarmingStats(BaseModel):
    active: bool = Field(..., description="A warm pass is currently running")
    pending: int = Field(..., ge=0, description="Items queued behind the active pass")


class CacheConfigModel(BaseModel):
    enabled: bool
    default_ttl: float
    max_size: int
    cleanup_interval: float
    compression_enabled: bool
    compression_threshold: int


class CacheEntryInfo(BaseModel):
    """One row of the entry listing. Timestamps are POSIX seconds."""

    key: str
    level: CacheLevel
    size: int = Field(..., ge=0, description="Serialized or stored size in bytes")
    compressed: bool
    access_count: int = Field(..., ge=0)
    created_at: float
    last_accessed: float
    expires_at: float
    ttl_remaining: float = Field(..., ge=0, description="Seconds until expiry")
    expired: bool
    tags: list[str] = Field(default_factory=list)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class CacheStatsResponse(BaseModel):
    """
    Response for GET /admin/cache/stats.

    Mirrors CacheManager.get_stats().
    """

    l1: TierStats
    l2: TierStats
    total: TotalStats
    performance: PerformanceStats
    warming: WarmingStats
    config: CacheConfigModel
    timestamp: str = Field(..., description="ISO 8601 timestamp (UTC)")


class CacheEntriesResponse(BaseModel):
    """Paginated response for GET /admin/cache/entries."""

    entries: list[CacheEntryInfo] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Matching entries before pagination")
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)


class InvalidationResponse(BaseModel):
    """Result of a delete, pattern or tag invalidation."""

    removed: int = Field(..., ge=0, description="Distinct keys removed")
    pattern: str | None = None
    tags: list[str] | None = None
    key: str | None = None


class ClearResponse(BaseModel):
    status: str = Field(default="cleared")
    removed: int = Field(..., ge=0)


class WarmResponse(BaseModel):
    """
    Response for POST /admin/cache/warm (202 Accepted).

    ``queued`` is True when another warm pass was running and the items
    were appended to its queue instead of being applied by this request.
    """

    accepted: int = Field(..., ge=0, description="Items accepted for warming")
    queued: bool = Field(..., description="Items were queued behind an active pass")


# ============================================================================
# REQUEST MODELS
# ============================================================================


class TagInvalidationRequest(BaseModel):
    """Body for POST /admin/cache/invalidate/tags."""

    tags: list[str] = Field(..., min_length=1, description="Remove entries carrying any of these tags")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: list[str]) -> list[str]:
        cleaned = [tag.strip() for tag in v if tag.strip()]
        if not cleaned:
            raise ValueError("tags must contain at least one non-empty tag")
        return cleaned


class WarmItemModel(BaseModel):
    """One entry to pre-populate."""

    key: str = Field(..., min_length=1, description="Cache key (see derive_key)")
    value: Any = Field(..., description="JSON payload to store")
    ttl: float | None = Field(default=None, ge=0, description="Seconds until expiry")
    tags: list[str] = Field(default_factory=list)
    level: CacheLevel | None = Field(default=None, description="Force the entry into a tier")
    compress: bool | None = Field(default=None, description="False disables compression")


class WarmRequest(BaseModel):
    """Body for POST /admin/cache/warm."""

    items: list[WarmItemModel] = Field(..., min_length=1)
