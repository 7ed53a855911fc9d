"""
Cache Test Factory

Creates comic payloads, warm batches and a failing cache double for testing.
"""

from typing import Any
from unittest.mock import MagicMock


class CacheTestFactory:
    """Factory for creating cache test objects."""

    @staticmethod
    def comic_page(page: int = 1, per_page: int = 20, provider: str = "asura") -> dict[str, Any]:
        """A listing page shaped like the aggregator's /comics response."""
        return {
            "page": page,
            "provider": provider,
            "items": [
                {
                    "slug": f"series-{page}-{i}",
                    "title": f"Series {page}-{i}",
                    "latest_chapter": i * 3,
                    "cover": f"https://cdn.example.com/{provider}/{page}/{i}.webp",
                }
                for i in range(per_page)
            ],
        }

    @staticmethod
    def warm_batch(paths: list[str], ttl: float | None = None, tags: list[str] | None = None) -> list[dict]:
        """Warm items (mapping form) for each path, payload = comic page."""
        return [
            {
                "key": path,
                "value": CacheTestFactory.comic_page(page=index + 1, per_page=2),
                "ttl": ttl,
                "tags": tags or [],
            }
            for index, path in enumerate(paths)
        ]

    @staticmethod
    def failing_cache(error: Exception) -> MagicMock:
        """Cache double whose lookups raise ``error``."""
        from src.infrastructure.cache.cache_manager import CacheManager

        cache = MagicMock(spec=CacheManager)
        cache.get.side_effect = error
        cache.set.side_effect = error
        return cache
