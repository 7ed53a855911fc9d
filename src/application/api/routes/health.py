"""
Health Check Routes
===================

Liveness endpoint for load balancers and monitoring, with a short summary
of the response cache.

BEST PRACTICES:
---------------
- Keep the check fast (no payload decoding, no tier scans beyond counts)
- Return 200 while the process can serve traffic; report a missing cache
  as ``degraded`` rather than failing, since routes still work uncached
- Include timestamps for debugging
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from src.application.api.dependencies import SettingsDep

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: str  # "healthy" or "degraded"
    timestamp: str  # ISO 8601 timestamp
    version: str
    components: dict | None = None


@router.get("", response_model=HealthResponse)
async def health_check(request: Request, settings: SettingsDep):
    """
    Quick health check endpoint for load balancers.

    Returns:
        HealthResponse: Service status with a cache component summary
    """
    cache = getattr(request.app.state, "cache", None)

    if cache is None:
        status = "degraded"
        cache_component = {"status": "unavailable"}
    else:
        status = "healthy"
        performance = cache.get_stats()["performance"]
        cache_component = {
            "status": "enabled" if cache.config.enabled else "disabled",
            "entries": cache.entry_count,
            "hit_rate": performance["hit_rate"],
            "sweeper_running": cache.sweeper_running,
        }

    return HealthResponse(
        status=status,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=settings.app.APP_VERSION,
        components={"cache": cache_component},
    )
