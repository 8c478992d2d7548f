"""
Cache API Response Models
=========================

Response shapes for the cache metrics endpoints. Field names are camelCase on
the wire (``hitRate``) to match what dashboards already consume.

Three response families:
- 200: ``{"success": true, "data": {"metrics": {...}, "redis": {...}}}``
- 503: ``{"error": "Redis not configured", "message": "..."}``
- 500: ``{"error": "Failed to fetch cache metrics", "message": "..."}``
"""

from typing import Any

from pydantic import BaseModel, Field

REDIS_NOT_CONFIGURED = "Redis not configured"
REDIS_NOT_CONFIGURED_MESSAGE = (
    "Cache metrics are unavailable. Please configure REDIS_URL and REDIS_TOKEN "
    "(or UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN)."
)
METRICS_FETCH_FAILED = "Failed to fetch cache metrics"


class CacheMetricsView(BaseModel):
    """Counter snapshot as rendered for clients."""

    hits: int = Field(..., ge=0, description="Cache hits since last reset")
    misses: int = Field(..., description="Cache misses since last reset")
    total: int = Field(..., description="hits + misses")
    hitRate: str = Field(..., description='Hit rate percentage, e.g. "85%"')

    @classmethod
    def from_metrics(cls, metrics) -> "CacheMetricsView":
        return cls(
            hits=metrics.hits,
            misses=metrics.misses,
            total=metrics.total,
            hitRate=format_hit_rate(metrics.hit_rate),
        )


class CacheMetricsData(BaseModel):
    metrics: CacheMetricsView
    redis: dict[str, Any]


class CacheMetricsResponse(BaseModel):
    success: bool = True
    data: CacheMetricsData


class CacheErrorResponse(BaseModel):
    error: str
    message: str


class CacheResetResponse(BaseModel):
    success: bool = True
    deleted: int = Field(..., ge=0, description="Number of counter keys removed")


def format_hit_rate(hit_rate: float) -> str:
    """85.0 -> "85%", 83.33 -> "83.33%"."""
    return f"{hit_rate:g}%"
