"""
Core cache data structures.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.core.config.constants import CacheLevel


@dataclass
class CacheEntry:
    """
    A stored payload plus the metadata the tiers and the sweeper act on.

    ``expires_at`` is fixed at insertion and never extended by access.
    ``tags`` are write-once; invalidation removes whole entries.
    """

    key: str
    value: Any
    expires_at: float
    created_at: float
    last_accessed: float
    compressed: bool = False
    access_count: int = 0
    tags: frozenset[str] = field(default_factory=frozenset)
    level: CacheLevel = CacheLevel.L1

    def is_expired(self, now: float) -> bool:
        """Logically dead once ``now`` passes ``expires_at``."""
        return now > self.expires_at

    def touch(self, now: float) -> None:
        """Record a successful lookup."""
        self.last_accessed = now
        self.access_count += 1


@dataclass
class WarmItem:
    """One pre-population request consumed by the warm queue."""

    key: str
    value: Any
    ttl: float | None = None
    tags: tuple[str, ...] = ()
    level: CacheLevel | None = None
    compress: bool | None = None

    @classmethod
    def coerce(cls, item: "WarmItem | Mapping[str, Any]") -> "WarmItem":
        """Accept either a WarmItem or a mapping with the same field names."""
        if isinstance(item, cls):
            return item
        level = item.get("level")
        return cls(
            key=item["key"],
            value=item["value"],
            ttl=item.get("ttl"),
            tags=tuple(item.get("tags") or ()),
            level=CacheLevel(level) if level is not None else None,
            compress=item.get("compress"),
        )


def normalize_tags(tags: Iterable[str] | None) -> frozenset[str]:
    if not tags:
        return frozenset()
    if isinstance(tags, str):
        return frozenset({tags})
    return frozenset(tags)
