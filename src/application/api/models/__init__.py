"""
API Models Package
==================

Pydantic models for API request/response validation.

ORGANIZATION:
-------------
- admin.py: Cache admin request and response models
"""

from src.application.api.models.admin import (
    CacheEntriesResponse,
    CacheEntryInfo,
    CacheStatsResponse,
    ClearResponse,
    InvalidationResponse,
    TagInvalidationRequest,
    WarmItemModel,
    WarmRequest,
    WarmResponse,
)

__all__ = [
    "CacheEntriesResponse",
    "CacheEntryInfo",
    "CacheStatsResponse",
    "ClearResponse",
    "InvalidationResponse",
    "TagInvalidationRequest",
    "WarmItemModel",
    "WarmRequest",
    "WarmResponse",
]
