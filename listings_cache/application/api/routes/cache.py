"""
Cache Metrics Routes - Educational Documentation
================================================

WHAT DO THESE ENDPOINTS REPORT?
-------------------------------
The listings cache keeps two global counters in the backend,
``cache:metrics:hits`` and ``cache:metrics:misses``. GET /cache/metrics reads
them and reports the hit rate; DELETE /cache/metrics resets them.

The counters are approximate. A read bumps the miss counter before looking the
key up and moves that count over to hits on a hit, so concurrent readers can
briefly see an inflated miss count. Good enough for a dashboard, not for
billing.

STATUS CODES:
-------------
- 200: metrics retrieved
- 503: no cache backend configured (the service itself is fine)
- 500: the backend is configured but the counters could not be read
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from listings_cache.application.api.dependencies import CacheServiceDep
from listings_cache.application.api.models.cache import (
    METRICS_FETCH_FAILED,
    REDIS_NOT_CONFIGURED,
    REDIS_NOT_CONFIGURED_MESSAGE,
    CacheErrorResponse,
    CacheMetricsData,
    CacheMetricsResponse,
    CacheMetricsView,
    CacheResetResponse,
)
from listings_cache.core.config.constants import CacheOutcome
from listings_cache.core.logging.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/cache", tags=["Cache"])

_ERROR_RESPONSES = {
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": CacheErrorResponse},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": CacheErrorResponse},
}


def _not_configured() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"error": REDIS_NOT_CONFIGURED, "message": REDIS_NOT_CONFIGURED_MESSAGE},
    )


@router.get("/metrics", response_model=CacheMetricsResponse, responses=_ERROR_RESPONSES)
async def get_cache_metrics(cache: CacheServiceDep):
    """
    Cache hit/miss counters and backend status.

    Example 200 body:
        {
          "success": true,
          "data": {
            "metrics": {"hits": 850, "misses": 150, "total": 1000, "hitRate": "85%"},
            "redis": {"status": "connected", "metrics": {...}, "timestamp": "..."}
          }
        }
    """
    if not cache.is_enabled():
        return _not_configured()

    try:
        metrics = await cache.get_cache_metrics()
        info = await cache.get_redis_info()
    except Exception as e:
        logger.error("Error fetching cache metrics", stage="CACHE.METRICS", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": METRICS_FETCH_FAILED, "message": str(e) or "Unknown error"},
        )

    if metrics is None or info is None:
        return _not_configured()

    return CacheMetricsResponse(
        data=CacheMetricsData(metrics=CacheMetricsView.from_metrics(metrics), redis=info)
    )


@router.delete("/metrics", response_model=CacheResetResponse, responses=_ERROR_RESPONSES)
async def reset_cache_metrics(cache: CacheServiceDep):
    """Reset both counters to zero (by deleting them)."""
    result = await cache.reset_cache_metrics()

    if result.outcome is CacheOutcome.DISABLED:
        return _not_configured()
    if result.outcome is CacheOutcome.ERROR:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to reset cache metrics", "message": result.error},
        )

    return CacheResetResponse(deleted=result.deleted)
