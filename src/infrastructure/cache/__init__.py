"""
Cache Module

Provides the two-tier in-memory response cache (L1 primary + L2 backstop).
"""

from .cache_manager import (
    CacheConfig,
    CacheManager,
    glob_to_regex,
)
from .codec import PayloadCodec
from .entry import CacheEntry, WarmItem
from .keys import derive_key, digest_key

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheManager",
    "PayloadCodec",
    "WarmItem",
    "derive_key",
    "digest_key",
    "glob_to_regex",
]
