"""
API Models Package
==================

Pydantic models for API responses that are not domain models.

ORGANIZATION:
-------------
- cache.py: Cache metrics endpoint response models
- health.py: Health endpoint response model

Listing request/response bodies live with the domain in
``listings_cache.listings.models``.
"""

from listings_cache.application.api.models.cache import (
    CacheErrorResponse,
    CacheMetricsData,
    CacheMetricsResponse,
    CacheMetricsView,
    CacheResetResponse,
    format_hit_rate,
)
from listings_cache.application.api.models.health import HealthResponse

__all__ = [
    "CacheErrorResponse",
    "CacheMetricsData",
    "CacheMetricsResponse",
    "CacheMetricsView",
    "CacheResetResponse",
    "HealthResponse",
    "format_hit_rate",
]
