"""
FastAPI Dependency Injection Module
===================================

Reusable dependencies for accessing application singletons that are
initialized during startup and stored on ``app.state``.

Example:
    @router.get("/example")
    async def my_route(cache: CacheDep, settings: SettingsDep):
        return {"entries": cache.entry_count, "env": settings.app.ENVIRONMENT}
"""

from typing import Annotated

from fastapi import Depends, Request

from src.core.config.settings import Settings, get_settings
from src.core.exceptions import CacheNotInitializedError
from src.infrastructure.cache.cache_manager import CacheManager


def get_cache(request: Request) -> CacheManager:
    """
    Retrieve the CacheManager from application state.

    The cache is created ONCE in the lifespan context manager and shared by
    every request, including the response cache middleware.

    Raises:
        CacheNotInitializedError: If the lifespan has not created the cache
            (rendered as 503 by the application exception handler)
    """
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        raise CacheNotInitializedError(
            "Cache is not initialized",
            details={"hint": "application lifespan startup did not complete"},
        )
    return cache


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with, else the global settings."""
    return getattr(request.app.state, "settings", None) or get_settings()


# ============================================================================
# TYPE ALIASES FOR CLEANER ROUTE SIGNATURES
# ============================================================================
# Annotated[Type, Depends(...)] lets FastAPI resolve the parameter through
# dependency injection while type checkers still see the plain type.

CacheDep = Annotated[CacheManager, Depends(get_cache)]

SettingsDep = Annotated[Settings, Depends(get_app_settings)]
