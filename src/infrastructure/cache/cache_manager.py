#!/usr/bin/env python3
"""
Multi-Tier Response Cache Manager

Architecture:
    CacheManager (Public API)
        ├── TierStorage x2 (L1 primary, L2 secondary/backstop)
        ├── PayloadCodec (gzip for large payloads)
        ├── CacheObserver (counters & logging)
        ├── ExpirySweeper (background TTL purge)
        └── CacheWarmer (ordered bulk pre-population)

Lookup:   L1 → L2 (promote a copy into L1, keep the L2 shadow) → miss
Insert:   evict if L1 full → L2 once L1 is 80% full, else L1
Eviction: least recently accessed L1 entry is demoted to L2, or dropped
          when L2 is full as well

All synchronous operations run to completion without suspending, so they
never observe each other half-applied on the event loop. warm_cache is
the only coroutine; its single-active-pass flag keeps warm passes from
interleaving.

Limitation: there is no single-flight. Two concurrent misses on the same
key both go to the upstream pipeline.
"""

import asyncio
import contextlib
import re
import time
from collections import OrderedDict, deque
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import asdict, dataclass, replace
from datetime import datetime, timezone
from typing import Any

from src.core.config.constants import (
    DEFAULT_CLEANUP_INTERVAL,
    DEFAULT_COMPRESSION_THRESHOLD,
    DEFAULT_MAX_SIZE,
    DEFAULT_TTL_SECONDS,
    L1_ADMISSION_THRESHOLD,
    L1_PRESSURE_THRESHOLD,
    LOG_KEY_PREVIEW_LENGTH,
    CacheLevel,
    Stage,
)
from src.core.config.settings import Settings
from src.core.exceptions import CompressionError, ConfigurationError, DecompressionError
from src.core.logging.logger import get_logger, log_stage
from src.infrastructure.cache.codec import PayloadCodec
from src.infrastructure.cache.entry import CacheEntry, WarmItem, normalize_tags

logger = get_logger(__name__)


def _preview(key: str) -> str:
    return key[:LOG_KEY_PREVIEW_LENGTH]


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class CacheConfig:
    """
    Engine configuration, injected into CacheManager.

    Attributes:
        enabled: When False, get always misses and set is a no-op
        default_ttl: TTL (seconds) used when set() gets none
        max_size: Entry bound for L1 (and for demotions into L2)
        cleanup_interval: Seconds between expiry sweeps
        compression_enabled: Compress payloads above the threshold
        compression_threshold: Serialized size (bytes) that triggers compression
    """

    enabled: bool = True
    default_ttl: float = DEFAULT_TTL_SECONDS
    max_size: int = DEFAULT_MAX_SIZE
    cleanup_interval: float = DEFAULT_CLEANUP_INTERVAL
    compression_enabled: bool = True
    compression_threshold: int = DEFAULT_COMPRESSION_THRESHOLD

    def __post_init__(self):
        if self.max_size < 1:
            raise ConfigurationError("max_size must be at least 1", details={"max_size": self.max_size})
        if self.default_ttl < 0:
            raise ConfigurationError(
                "default_ttl must not be negative", details={"default_ttl": self.default_ttl}
            )
        if self.cleanup_interval <= 0:
            raise ConfigurationError(
                "cleanup_interval must be positive",
                details={"cleanup_interval": self.cleanup_interval},
            )
        if self.compression_threshold < 0:
            raise ConfigurationError(
                "compression_threshold must not be negative",
                details={"compression_threshold": self.compression_threshold},
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheConfig":
        cache = settings.cache
        return cls(
            enabled=cache.ENABLE_CACHING,
            default_ttl=cache.CACHE_DEFAULT_TTL,
            max_size=cache.CACHE_MAX_SIZE,
            cleanup_interval=cache.CACHE_CLEANUP_INTERVAL,
            compression_enabled=cache.CACHE_COMPRESSION_ENABLED,
            compression_threshold=cache.CACHE_COMPRESSION_THRESHOLD,
        )


# =============================================================================
# LAYER 1: STORAGE
# =============================================================================


class TierStorage:
    """
    One bounded key → CacheEntry mapping.

    Bounds are enforced by CacheManager, not here: L1 is checked before
    every insertion while L2 is only checked when receiving demotions.
    """

    def __init__(self, level: CacheLevel):
        self.level = level
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def put(self, entry: CacheEntry) -> None:
        self._entries[entry.key] = entry

    def pop(self, key: str) -> CacheEntry | None:
        return self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def keys(self) -> list[str]:
        """Snapshot of keys, safe to iterate while removing."""
        return list(self._entries.keys())

    def entries(self) -> Iterator[CacheEntry]:
        return iter(self._entries.values())

    def least_recently_accessed(self) -> CacheEntry | None:
        """
        Linear scan for the oldest ``last_accessed``.

        O(n) in the tier size, bounded by max_size. Ties go to the entry
        inserted first.
        """
        return min(self._entries.values(), key=lambda entry: entry.last_accessed, default=None)


# =============================================================================
# LAYER 2: OBSERVABILITY
# =============================================================================


@dataclass
class CacheCounters:
    hits: int = 0
    misses: int = 0
    sets: int = 0
    deletes: int = 0
    evictions: int = 0
    expirations: int = 0
    compressions: int = 0
    decompressions: int = 0
    skipped_compressions: int = 0

    @property
    def hit_rate(self) -> float:
        """Percentage of lookups served from cache, 0.0 before any lookup."""
        lookups = self.hits + self.misses
        return round(self.hits / lookups * 100, 2) if lookups else 0.0


class CacheObserver:
    """
    Tracks cache counters and logs operations.

    Responsibility: All side effects (logging, metrics). The storage and
    manager code never touch counters directly.
    """

    def __init__(self, logger_instance=None):
        self._logger = logger_instance or logger
        self.counters = CacheCounters()

    def reset(self) -> None:
        self.counters = CacheCounters()

    def record_hit(self, key: str, source: CacheLevel) -> None:
        self.counters.hits += 1
        log_stage(
            self._logger, Stage.CACHE_LOOKUP, f"{source.value.upper()} cache hit",
            level="debug", cache_key=_preview(key),
        )

    def record_miss(self, key: str, expired: bool = False) -> None:
        self.counters.misses += 1
        log_stage(
            self._logger, Stage.CACHE_LOOKUP, "Cache miss",
            level="debug", cache_key=_preview(key), expired=expired,
        )

    def record_decode_failure(self, key: str, error: DecompressionError) -> None:
        self.counters.misses += 1
        log_stage(
            self._logger, Stage.CODEC, "Dropping unreadable cache entry",
            level="warning", cache_key=_preview(key), error=error.message,
            original_error=error.details.get("original_error"),
        )

    def record_promotion(self, key: str) -> None:
        log_stage(self._logger, Stage.CACHE_PROMOTION, "Promoted L2 entry to L1", level="debug",
                  cache_key=_preview(key))

    def record_set(self, key: str, level: CacheLevel, compressed: bool) -> None:
        self.counters.sets += 1
        log_stage(
            self._logger, Stage.CACHE_POPULATION, "Cache set", level="debug",
            cache_key=_preview(key), tier=level.value, compressed=compressed,
        )

    def record_compression(self, key: str, raw_size: int, stored_size: int) -> None:
        self.counters.compressions += 1
        log_stage(
            self._logger, Stage.CODEC, "Payload compressed", level="debug",
            cache_key=_preview(key), raw_bytes=raw_size, stored_bytes=stored_size,
        )

    def record_decompression(self) -> None:
        self.counters.decompressions += 1

    def record_compression_skipped(self, key: str, error: CompressionError) -> None:
        self.counters.skipped_compressions += 1
        log_stage(
            self._logger, Stage.CODEC, "Storing payload uncompressed", level="debug",
            cache_key=_preview(key), reason=error.message,
        )

    def record_deletes(self, count: int) -> None:
        self.counters.deletes += count

    def record_eviction(self, key: str, demoted: bool) -> None:
        self.counters.evictions += 1
        log_stage(
            self._logger, Stage.CACHE_EVICTION,
            "Evicted L1 entry to L2" if demoted else "Evicted L1 entry (L2 full, dropped)",
            level="debug", cache_key=_preview(key),
        )

    def record_expirations(self, count: int) -> None:
        self.counters.expirations += count

    def get_stats(self) -> dict[str, Any]:
        return {**asdict(self.counters), "hit_rate": self.counters.hit_rate}


# =============================================================================
# LAYER 3: EXPIRY SWEEPER
# =============================================================================


class ExpirySweeper:
    """
    Recurring background purge of expired entries.

    Runs ``sweep`` every ``interval`` seconds in one asyncio task owned by
    the cache, so a pass never overlaps another. start() needs a running
    event loop; start() and stop() are both idempotent.
    """

    def __init__(self, sweep: Callable[[], int], interval: float):
        self._sweep = sweep
        self._interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name="cache-expiry-sweeper")
        log_stage(logger, Stage.CACHE_EXPIRY, "Expiry sweeper started", interval_seconds=self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        log_stage(logger, Stage.CACHE_EXPIRY, "Expiry sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                removed = self._sweep()
            except Exception:
                logger.exception("Expiry sweep failed", stage=Stage.CACHE_EXPIRY)
                continue
            if removed:
                log_stage(logger, Stage.CACHE_EXPIRY, "Expired entries purged", level="debug", removed=removed)


# =============================================================================
# LAYER 4: CACHE WARMING
# =============================================================================


class CacheWarmer:
    """
    Serializes bulk pre-population.

    Exactly one warm pass drives the queue at a time. A batch submitted
    while a pass is active is appended to the pending queue and the call
    returns at once; the driving pass applies it after its own items, in
    arrival order. A failing item is logged and skipped.
    """

    def __init__(self, apply: Callable[[WarmItem], None]):
        self._apply = apply
        self._pending: deque[WarmItem] = deque()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def warm(self, items: Iterable[WarmItem | Mapping[str, Any]]) -> None:
        batch = [WarmItem.coerce(item) for item in items]

        if self._active:
            self._pending.extend(batch)
            log_stage(logger, Stage.CACHE_WARMING, "Warm batch queued behind active pass",
                      level="debug", queued=len(batch), pending=len(self._pending))
            return

        self._active = True
        applied = failed = 0
        try:
            for item in batch:
                if self._apply_one(item):
                    applied += 1
                else:
                    failed += 1
                # Let other requests run between items
                await asyncio.sleep(0)

            while self._pending:
                if self._apply_one(self._pending.popleft()):
                    applied += 1
                else:
                    failed += 1
                await asyncio.sleep(0)
        finally:
            self._active = False

        log_stage(logger, Stage.CACHE_WARMING, "Cache warming complete", warmed_items=applied, failed_items=failed)

    def _apply_one(self, item: WarmItem) -> bool:
        try:
            self._apply(item)
        except Exception:
            logger.exception("Warm item failed", stage=Stage.CACHE_WARMING, cache_key=_preview(item.key))
            return False
        return True


# =============================================================================
# LAYER 5: PUBLIC API
# =============================================================================


class CacheManager:
    """
    Two-tier in-memory response cache.

    Usage:
        cache = CacheManager(CacheConfig(max_size=500))
        await cache.start()  # expiry sweeper

        cache.set("/api/v1/comics?page=1", payload, ttl=120, tags=["provider:asura"])
        payload = cache.get("/api/v1/comics?page=1")

        cache.invalidate_by_tags(["provider:asura"])
        await cache.warm_cache([{"key": "/api/v1/genres", "value": genres}])
        stats = cache.get_stats()

        await cache.stop()

    get() returns None on a miss, so a stored None reads as a miss.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] = time.time,
        codec: PayloadCodec | None = None,
    ):
        self._config = config or CacheConfig()
        self._clock = clock
        self._codec = codec or PayloadCodec()

        self._l1 = TierStorage(CacheLevel.L1)
        self._l2 = TierStorage(CacheLevel.L2)
        self._observer = CacheObserver()
        self._sweeper = ExpirySweeper(self.cleanup, self._config.cleanup_interval)
        self._warmer = CacheWarmer(self._apply_warm_item)

        log_stage(
            logger, Stage.INITIALIZATION, "Cache manager initialized",
            max_size=self._config.max_size,
            default_ttl=self._config.default_ttl,
            caching_enabled=self._config.enabled,
            compression_enabled=self._config.compression_enabled,
        )

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def sweeper_running(self) -> bool:
        return self._sweeper.running

    @property
    def is_warming(self) -> bool:
        return self._warmer.active

    @property
    def pending_warm_items(self) -> int:
        return self._warmer.pending

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Start the background expiry sweeper."""
        self._sweeper.start()

    async def stop(self) -> None:
        """Stop the expiry sweeper. Entries are kept."""
        await self._sweeper.stop()

    # -------------------------------------------------------------------------
    # Core Cache Operations
    # -------------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """
        Look a key up in L1, then L2.

        STAGE-2.0: Cache lookup

        An L2 hit is copied into L1 and stays in L2 as a shadow. Expired
        entries found on the way are purged from both tiers. A compressed
        entry that fails to decode is purged and reported as a miss.

        Returns:
            Cached value, or None on a miss
        """
        if not self._config.enabled:
            return None

        now = self._clock()
        saw_expired = False
        entry = None
        source = CacheLevel.L1

        candidate = self._l1.get(key)
        if candidate is not None:
            if candidate.is_expired(now):
                saw_expired = True
            else:
                entry = candidate

        if entry is None:
            shadow = self._l2.get(key)
            if shadow is not None:
                if shadow.is_expired(now):
                    saw_expired = True
                else:
                    entry = self._promote(shadow)
                    source = CacheLevel.L2

        if entry is None:
            if saw_expired:
                self._remove_everywhere(key)
            self._observer.record_miss(key, expired=saw_expired)
            return None

        value = entry.value
        if entry.compressed:
            try:
                value = self._codec.decode(entry.value)
            except DecompressionError as e:
                self._remove_everywhere(key)
                self._observer.record_decode_failure(key, e)
                return None
            self._observer.record_decompression()

        entry.touch(now)
        self._observer.record_hit(key, source)
        return value

    def set(
        self,
        key: str,
        value: Any,
        ttl: float | None = None,
        *,
        level: CacheLevel | str | None = None,
        tags: Iterable[str] | None = None,
        compress: bool | None = None,
    ) -> None:
        """
        Store a value.

        STAGE-2.2: Cache population

        Args:
            key: Cache key
            value: Payload
            ttl: Seconds until expiry (default: config.default_ttl)
            level: Force a tier; only ``L2`` changes placement
            tags: Labels for invalidate_by_tags, fixed for the entry's life
            compress: ``False`` disables compression for this value
        """
        if not self._config.enabled:
            return

        now = self._clock()
        max_size = self._config.max_size

        # A rewrite replaces the old entry wherever it lives
        self._remove_everywhere(key)

        if len(self._l1) >= max_size:
            self.evict_lru()

        expires_at = now + (ttl if ttl is not None else self._config.default_ttl)
        stored, compressed = self._encode(key, value, compress)

        requested = CacheLevel(level) if level is not None else None
        if requested is CacheLevel.L2 or len(self._l1) >= max_size * L1_ADMISSION_THRESHOLD:
            target = self._l2
        else:
            target = self._l1

        target.put(
            CacheEntry(
                key=key,
                value=stored,
                expires_at=expires_at,
                created_at=now,
                last_accessed=now,
                compressed=compressed,
                tags=normalize_tags(tags),
                level=target.level,
            )
        )
        self._observer.record_set(key, target.level, compressed)

    def delete(self, key: str) -> bool:
        """
        Remove a key from both tiers.

        STAGE-2.4: Cache invalidation

        Returns:
            True if the key was present in either tier
        """
        removed = self._remove_everywhere(key)
        if removed:
            self._observer.record_deletes(1)
            log_stage(logger, Stage.CACHE_INVALIDATION, "Cache entry deleted", level="debug",
                      cache_key=_preview(key))
        return removed

    def evict_lru(self) -> str | None:
        """
        Demote the least recently accessed L1 entry.

        STAGE-2.3: Cache eviction

        The entry moves to L2 while L2 has room (or already shadows the
        key); otherwise it is dropped.

        Returns:
            Evicted key, or None when L1 is empty
        """
        victim = self._l1.least_recently_accessed()
        if victim is None:
            return None

        self._l1.pop(victim.key)
        demoted = len(self._l2) < self._config.max_size or victim.key in self._l2
        if demoted:
            self._l2.put(replace(victim, level=CacheLevel.L2))

        self._observer.record_eviction(victim.key, demoted)
        return victim.key

    # -------------------------------------------------------------------------
    # Invalidation
    # -------------------------------------------------------------------------

    def invalidate_pattern(self, pattern: str) -> int:
        """
        Remove every key matching a glob pattern.

        ``*`` matches any run of characters; every other character is
        literal, so ``/api/v1/comics?page=1`` matches only itself. The
        match is anchored at both ends.

        Returns:
            Number of distinct keys removed
        """
        matcher = glob_to_regex(pattern)
        removed = self._remove_matching(lambda entry: matcher.fullmatch(entry.key) is not None)
        self._observer.record_deletes(removed)
        log_stage(logger, Stage.CACHE_INVALIDATION, "Pattern invalidation", pattern=pattern, removed=removed)
        return removed

    def invalidate_by_tags(self, tags: Iterable[str]) -> int:
        """
        Remove every entry carrying at least one of ``tags``.

        Returns:
            Number of distinct keys removed
        """
        wanted = normalize_tags(tags)
        if not wanted:
            return 0

        removed = self._remove_matching(lambda entry: not wanted.isdisjoint(entry.tags))
        self._observer.record_deletes(removed)
        log_stage(logger, Stage.CACHE_INVALIDATION, "Tag invalidation", tags=sorted(wanted), removed=removed)
        return removed

    def clear(self) -> None:
        """
        Empty both tiers.

        Held keys are added to the delete counter; other counters keep
        their values (see reset_stats).
        """
        held = len(set(self._l1.keys()) | set(self._l2.keys()))
        self._l1.clear()
        self._l2.clear()
        self._observer.record_deletes(held)
        log_stage(logger, Stage.CACHE_INVALIDATION, "Cache cleared", removed=held)

    def reset_stats(self) -> None:
        """Zero every counter."""
        self._observer.reset()

    # -------------------------------------------------------------------------
    # Expiry
    # -------------------------------------------------------------------------

    def cleanup(self) -> int:
        """
        One expiry pass over both tiers.

        STAGE-2.5: Expiry sweep

        Expired keys are collected first and removed after the scan. If L1
        is still above 90% of max_size afterwards, one entry is evicted.

        Returns:
            Number of distinct keys purged
        """
        now = self._clock()
        expired_l1 = [entry.key for entry in self._l1.entries() if entry.expires_at < now]
        expired_l2 = [entry.key for entry in self._l2.entries() if entry.expires_at < now]

        for key in expired_l1:
            self._l1.pop(key)
        for key in expired_l2:
            self._l2.pop(key)

        purged = len(set(expired_l1) | set(expired_l2))
        self._observer.record_expirations(purged)

        if len(self._l1) > self._config.max_size * L1_PRESSURE_THRESHOLD:
            self.evict_lru()

        return purged

    # -------------------------------------------------------------------------
    # Cache Warming
    # -------------------------------------------------------------------------

    async def warm_cache(self, items: Iterable[WarmItem | Mapping[str, Any]]) -> None:
        """
        Pre-populate entries in submission order.

        STAGE-2.6: Cache warming

        Items are WarmItem instances or mappings with keys ``key``,
        ``value`` and optionally ``ttl``, ``tags``, ``level``, ``compress``.
        If another warm pass is running, the items are queued for it and
        this call returns immediately.
        """
        await self._warmer.warm(items)

    def _apply_warm_item(self, item: WarmItem) -> None:
        self.set(item.key, item.value, item.ttl, level=item.level, tags=item.tags, compress=item.compress)

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    def get_stats(self) -> dict[str, Any]:
        """
        Cache statistics for the admin surface.

        Returns:
            Dict with per-tier occupancy, totals, counters and config
        """
        now = self._clock()
        l1 = self._tier_stats(self._l1, now)
        l2 = self._tier_stats(self._l2, now)
        estimated = sum(self._estimate_size(entry) for entry in self._all_entries())

        return {
            "l1": l1,
            "l2": l2,
            "total": {
                "size": l1["size"] + l2["size"],
                "expired": l1["expired"] + l2["expired"],
                "active": l1["active"] + l2["active"],
                "estimated_bytes": estimated,
            },
            "performance": self._observer.get_stats(),
            "warming": {"active": self._warmer.active, "pending": self._warmer.pending},
            "config": asdict(self._config),
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }

    def list_entries(self, limit: int = 50, offset: int = 0, contains: str | None = None) -> dict[str, Any]:
        """
        Paginated entry listing for the dashboard.

        L2 shadows of keys already in L1 are not listed separately.

        Args:
            limit: Page size
            offset: Entries to skip
            contains: Case-insensitive key substring filter

        Returns:
            Dict with ``entries`` (page), ``total`` (after filtering),
            ``limit`` and ``offset``
        """
        now = self._clock()
        needle = contains.lower() if contains else None

        rows = [
            self._describe(entry, now)
            for entry in self._all_entries()
            if needle is None or needle in entry.key.lower()
        ]
        return {
            "entries": rows[offset:offset + limit],
            "total": len(rows),
            "limit": limit,
            "offset": offset,
        }

    @property
    def entry_count(self) -> int:
        """Distinct keys held across both tiers."""
        return len(set(self._l1.keys()) | set(self._l2.keys()))

    def __contains__(self, key: str) -> bool:
        return key in self._l1 or key in self._l2

    def level_of(self, key: str) -> CacheLevel | None:
        """Tier currently answering for ``key``, L1 first."""
        if key in self._l1:
            return CacheLevel.L1
        if key in self._l2:
            return CacheLevel.L2
        return None

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _promote(self, shadow: CacheEntry) -> CacheEntry:
        if shadow.key not in self._l1 and len(self._l1) >= self._config.max_size:
            self.evict_lru()
        promoted = replace(shadow, level=CacheLevel.L1)
        self._l1.put(promoted)
        self._observer.record_promotion(shadow.key)
        return promoted

    def _encode(self, key: str, value: Any, compress: bool | None) -> tuple[Any, bool]:
        if not self._config.compression_enabled or compress is False:
            return value, False

        try:
            raw = self._codec.serialize(value)
            if len(raw) <= self._config.compression_threshold:
                return value, False
            self._codec.ensure_round_trip(value, raw)
            blob = self._codec.compress(raw)
        except CompressionError as e:
            self._observer.record_compression_skipped(key, e)
            return value, False

        self._observer.record_compression(key, len(raw), len(blob))
        return blob, True

    def _remove_everywhere(self, key: str) -> bool:
        in_l1 = self._l1.pop(key) is not None
        in_l2 = self._l2.pop(key) is not None
        return in_l1 or in_l2

    def _remove_matching(self, predicate: Callable[[CacheEntry], bool]) -> int:
        doomed = {entry.key for entry in self._l1.entries() if predicate(entry)}
        doomed.update(entry.key for entry in self._l2.entries() if predicate(entry))
        for key in list(doomed):
            self._remove_everywhere(key)
        return len(doomed)

    def _all_entries(self) -> Iterator[CacheEntry]:
        yield from self._l1.entries()
        for entry in self._l2.entries():
            if entry.key not in self._l1:
                yield entry

    def _tier_stats(self, tier: TierStorage, now: float) -> dict[str, int]:
        expired = sum(1 for entry in tier.entries() if entry.is_expired(now))
        return {
            "size": len(tier),
            "max_size": self._config.max_size,
            "expired": expired,
            "active": len(tier) - expired,
        }

    def _estimate_size(self, entry: CacheEntry) -> int:
        if entry.compressed:
            return len(entry.value)
        try:
            return self._codec.serialized_size(entry.value)
        except CompressionError:
            return 0

    def _describe(self, entry: CacheEntry, now: float) -> dict[str, Any]:
        return {
            "key": entry.key,
            "level": entry.level.value,
            "size": self._estimate_size(entry),
            "compressed": entry.compressed,
            "access_count": entry.access_count,
            "created_at": entry.created_at,
            "last_accessed": entry.last_accessed,
            "expires_at": entry.expires_at,
            "ttl_remaining": max(0.0, entry.expires_at - now),
            "expired": entry.is_expired(now),
            "tags": sorted(entry.tags),
        }


def glob_to_regex(pattern: str) -> re.Pattern:
    """
    Compile a ``*``-only glob into a regex.

    Every character other than ``*`` is escaped, so regex metacharacters
    in keys (``?``, ``.``, ``+``) match literally.
    """
    return re.compile(".*".join(re.escape(part) for part in pattern.split("*")), re.DOTALL)

