"""
Cache Module

Read-through Redis cache for listings pages, listing details and searches.
"""

from .cache_keys import CacheKeys, CachePatterns
from .cache_service import CacheMetrics, CacheResult, ListingsCacheService
from .redis_client import RedisClient, RedisClientProvider
from .search_hash import create_search_hash
from .ttl_policy import TTLPolicy

__all__ = [
    "CacheKeys",
    "CacheMetrics",
    "CachePatterns",
    "CacheResult",
    "ListingsCacheService",
    "RedisClient",
    "RedisClientProvider",
    "TTLPolicy",
    "create_search_hash",
]
