"""
Admin Routes
============

Operational endpoints for inspecting and managing the response cache.

SECURITY CONSIDERATIONS:
------------------------
In production, admin endpoints should be:
- Protected by authentication/authorization
- Exposed on a separate port (not public-facing)
- Logged for audit trails

Admin paths are excluded from the response cache (CACHE_EXCLUDED_PATHS),
so these endpoints always see live cache state.
"""

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from fastapi.responses import JSONResponse

from src.application.api.dependencies import CacheDep
from src.application.api.models.admin import (
    CacheEntriesResponse,
    CacheStatsResponse,
    ClearResponse,
    InvalidationResponse,
    TagInvalidationRequest,
    WarmRequest,
    WarmResponse,
)
from src.core.exceptions import InvalidInputError
from src.infrastructure.cache.entry import WarmItem

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


# ============================================================================
# AUTHENTICATION PLACEHOLDER
# ============================================================================


async def verify_admin_access() -> None:
    """
    Placeholder for admin authentication.

    Replace with real token verification (e.g. an HTTPBearer dependency
    raising HTTPException(403)) before exposing the admin surface.
    """
    pass


# ============================================================================
# STATISTICS ENDPOINTS
# ============================================================================


@router.get(
    "/cache/stats",
    response_model=CacheStatsResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def get_cache_stats(cache: CacheDep):
    """
    Retrieve cache statistics.

    Returns per-tier occupancy, totals, cumulative counters (hits, misses,
    sets, deletes, evictions, expirations, compressions), warm queue state
    and the active configuration.
    """
    return cache.get_stats()


@router.get(
    "/cache/entries",
    response_model=CacheEntriesResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def list_cache_entries(
    cache: CacheDep,
    limit: int = Query(default=50, ge=1, le=500, description="Page size"),
    offset: int = Query(default=0, ge=0, description="Entries to skip"),
    contains: str | None = Query(default=None, alias="filter", description="Case-insensitive key substring"),
):
    """Paginated listing of cached entries (metadata only, no payloads)."""
    return cache.list_entries(limit=limit, offset=offset, contains=contains)


# ============================================================================
# INVALIDATION ENDPOINTS
# ============================================================================


@router.delete(
    "/cache/entries",
    response_model=InvalidationResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def invalidate_cache_pattern(
    cache: CacheDep,
    pattern: str = Query(..., description="Glob pattern; '*' matches any run of characters"),
):
    """
    Remove every entry whose key matches ``pattern``.

    Examples:
        /api/v1/comics*          every comics listing page
        */chapters*              chapter lists of every series
        *                        everything
    """
    if not pattern.strip():
        raise InvalidInputError("pattern must not be empty", details={"pattern": pattern})

    removed = cache.invalidate_pattern(pattern)
    logger.info("admin_cache_pattern_invalidated", pattern=pattern, removed=removed)
    return InvalidationResponse(removed=removed, pattern=pattern)


@router.delete(
    "/cache/entry",
    response_model=InvalidationResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def delete_cache_entry(cache: CacheDep, key: str = Query(..., min_length=1)):
    """Remove a single key from both tiers. 404 if the key is not cached."""
    if not cache.delete(key):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "not_found", "message": "Key is not cached", "key": key},
        )
    logger.info("admin_cache_entry_deleted", key=key)
    return InvalidationResponse(removed=1, key=key)


@router.post(
    "/cache/invalidate/tags",
    response_model=InvalidationResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def invalidate_cache_tags(body: TagInvalidationRequest, cache: CacheDep):
    """Remove every entry carrying at least one of the given tags."""
    removed = cache.invalidate_by_tags(body.tags)
    logger.info("admin_cache_tags_invalidated", tags=body.tags, removed=removed)
    return InvalidationResponse(removed=removed, tags=body.tags)


@router.post(
    "/cache/clear",
    response_model=ClearResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def clear_cache(cache: CacheDep):
    """Empty both tiers. Counters other than deletes are kept."""
    removed = cache.entry_count
    cache.clear()
    logger.info("admin_cache_cleared", removed=removed)
    return ClearResponse(removed=removed)


# ============================================================================
# WARMING
# ============================================================================


@router.post(
    "/cache/warm",
    response_model=WarmResponse,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(verify_admin_access)],
)
async def warm_cache(body: WarmRequest, cache: CacheDep, background_tasks: BackgroundTasks):
    """
    Pre-populate the cache.

    The warm pass runs after the response is sent. If a pass is already
    running, the items join its queue and are applied after its current
    items, in submission order.
    """
    items = [
        WarmItem(
            key=item.key,
            value=item.value,
            ttl=item.ttl,
            tags=tuple(item.tags),
            level=item.level,
            compress=item.compress,
        )
        for item in body.items
    ]
    queued = cache.is_warming
    background_tasks.add_task(cache.warm_cache, items)

    logger.info("admin_cache_warm_accepted", items=len(items), queued=queued)
    return WarmResponse(accepted=len(items), queued=queued)
