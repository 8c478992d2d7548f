"""
Health Check Routes - Educational Documentation
================================================

WHAT ARE HEALTH CHECKS?
-----------------------
Health checks report the status of the application and its dependencies.
Load balancers and orchestrators use them to decide where traffic goes.

CACHE STATUS IS NEVER FATAL:
----------------------------
The listings cache is an optimization in front of the primary store. A
missing or unreachable cache slows responses down but does not stop the
service from answering, so:

- cache "connected"   → status "healthy"
- cache "disabled"    → status "healthy" (no backend configured on purpose)
- cache "unreachable" → status "degraded", still HTTP 200

Liveness (/health/live) never touches the cache at all.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from listings_cache.application.api.dependencies import CacheServiceDep, SettingsDep
from listings_cache.application.api.models.health import HealthResponse
from listings_cache.core.config.constants import CacheStatus

router = APIRouter(prefix="/health", tags=["Health"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("", response_model=HealthResponse)
async def health_check(cache: CacheServiceDep, settings: SettingsDep):
    """
    Service health including the cache backend status.

    Returns:
        HealthResponse with ``components.cache.status`` set to
        connected / disabled / unreachable
    """
    cache_health = await cache.health_check()
    overall = "degraded" if cache_health["status"] == CacheStatus.UNREACHABLE.value else "healthy"

    return HealthResponse(
        status=overall,
        timestamp=_timestamp(),
        version=settings.app.APP_VERSION,
        components={"cache": cache_health},
    )


@router.get("/live")
async def liveness_probe():
    """Kubernetes liveness probe: the process is up and serving."""
    return {"status": "alive", "timestamp": _timestamp()}
