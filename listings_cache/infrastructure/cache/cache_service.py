#!/usr/bin/env python3
"""
Listings Cache Service

Architecture:
    ListingsCacheService (Public API)
        ├── RedisClientProvider (memoized connection handle, or None)
        ├── CacheKeys / CachePatterns (key layout)
        ├── TTLPolicy (lifetime per entry class)
        └── hit/miss counters (cache:metrics:*)

Read-through contract:
    1. No connection handle      → DISABLED, no commands issued
    2. INCR misses (speculative) → GET key
    3. Value present             → INCR hits, DECR misses → HIT
    4. Value absent              → MISS (the miss stays counted)

Failure policy:
    Every backend failure is logged and resolved to a miss or a no-op
    (outcome ERROR). The primary store stays the source of truth, so a cache
    outage costs latency, never correctness. Metric retrieval is the one
    exception: get_cache_metrics / get_redis_info let errors propagate so the
    metrics endpoint can report them.

The counters are approximate. Steps 2-3 are separate commands with no
transaction, so concurrent readers can observe a transiently inflated miss
count.

Author: System Architect
Date: 2025-12-09
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import orjson

from listings_cache.core.config.constants import CacheOutcome, CacheStatus, EntryClass
from listings_cache.core.exceptions import CacheError
from listings_cache.core.logging.logger import get_logger, log_stage
from listings_cache.infrastructure.cache.cache_keys import CacheKeys, CachePatterns
from listings_cache.infrastructure.cache.search_hash import create_search_hash
from listings_cache.infrastructure.cache.ttl_policy import TTLPolicy

logger = get_logger(__name__)

__all__ = [
    "CacheMetrics",
    "CacheResult",
    "ListingsCacheService",
    "create_search_hash",
]


@dataclass(frozen=True)
class CacheResult:
    """
    Outcome of a single cache operation.

    Attributes:
        outcome: What happened (hit, miss, stored, invalidated, disabled, error)
        value: Deserialized payload on a hit
        deleted: Number of keys removed by an invalidation
        error: Diagnostic message when the backend call failed
    """

    outcome: CacheOutcome
    value: Any = None
    deleted: int = 0
    error: str | None = None

    @property
    def hit(self) -> bool:
        return self.outcome is CacheOutcome.HIT


@dataclass(frozen=True)
class CacheMetrics:
    """Snapshot of the global hit/miss counters."""

    hits: int
    misses: int
    hit_rate: float

    @property
    def total(self) -> int:
        return self.hits + self.misses

    @classmethod
    def from_counters(cls, hits: int, misses: int) -> "CacheMetrics":
        total = hits + misses
        hit_rate = round(hits / total * 100, 2) if total > 0 else 0.0
        return cls(hits=hits, misses=misses, hit_rate=hit_rate)

    def to_dict(self) -> dict[str, Any]:
        return {"hits": self.hits, "misses": self.misses, "hitRate": self.hit_rate}


def _counter_value(raw: str | None) -> int:
    return int(raw) if raw else 0


class ListingsCacheService:
    """
    Read-through cache for listings pages, listing details and searches.

    Usage:
        service = ListingsCacheService(RedisClientProvider(settings))

        result = await service.get_cached_listing_detail(listing_id)
        if not result.hit:
            listing = await store.get(listing_id)
            await service.set_cached_listing_detail(listing_id, listing)

        await service.invalidate_listings_cache()
    """

    def __init__(self, client_provider, ttl_policy: TTLPolicy | None = None):
        """
        Args:
            client_provider: Object exposing ``is_available()`` and
                ``get_client()`` (see RedisClientProvider)
            ttl_policy: Lifetimes per entry class (defaults to the built-in table)
        """
        self._provider = client_provider
        self._ttl_policy = ttl_policy or TTLPolicy()

    @property
    def ttl_policy(self) -> TTLPolicy:
        return self._ttl_policy

    def is_enabled(self) -> bool:
        return self._provider.is_available()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def get_cached_listings_page(self, page: int) -> CacheResult:
        return await self._read(CacheKeys.listings_page(page), EntryClass.LISTINGS_PAGE)

    async def get_cached_listing_detail(self, listing_id: str) -> CacheResult:
        return await self._read(CacheKeys.listing_detail(listing_id), EntryClass.LISTING_DETAIL)

    async def get_cached_search(self, search_hash: str) -> CacheResult:
        return await self._read(CacheKeys.listings_search(search_hash), EntryClass.SEARCH_RESULT)

    async def _read(self, key: str, entry_class: EntryClass) -> CacheResult:
        """
        STAGE-CACHE.GET: Read-through lookup with speculative miss accounting.
        """
        client = self._provider.get_client()
        if client is None:
            return CacheResult(CacheOutcome.DISABLED)

        try:
            await client.incr(CacheKeys.cache_misses())
            raw = await client.get(key)
            if raw is None:
                logger.debug("Cache miss", stage="CACHE.GET", key=key, entry_class=entry_class.value)
                return CacheResult(CacheOutcome.MISS)

            value = orjson.loads(raw)
            await client.incr(CacheKeys.cache_hits())
            await client.decr(CacheKeys.cache_misses())
            logger.debug("Cache hit", stage="CACHE.GET", key=key, entry_class=entry_class.value)
            return CacheResult(CacheOutcome.HIT, value=value)

        except Exception as e:
            logger.warning(
                "Cache read failed, treating as miss",
                stage="CACHE.GET",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CacheResult(CacheOutcome.ERROR, error=str(e))

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    async def set_cached_listings_page(self, page: int, data: Any) -> CacheResult:
        return await self._write(CacheKeys.listings_page(page), EntryClass.LISTINGS_PAGE, data)

    async def set_cached_listing_detail(self, listing_id: str, data: Any) -> CacheResult:
        return await self._write(
            CacheKeys.listing_detail(listing_id), EntryClass.LISTING_DETAIL, data
        )

    async def set_cached_search(self, search_hash: str, data: Any) -> CacheResult:
        return await self._write(
            CacheKeys.listings_search(search_hash), EntryClass.SEARCH_RESULT, data
        )

    async def _write(self, key: str, entry_class: EntryClass, data: Any) -> CacheResult:
        """
        STAGE-CACHE.SET: Overwrite the entry with its class TTL.
        """
        client = self._provider.get_client()
        if client is None:
            return CacheResult(CacheOutcome.DISABLED)

        ttl = self._ttl_policy.ttl_for(entry_class)
        try:
            payload = orjson.dumps(data).decode("utf-8")
            await client.setex(key, ttl, payload)
            logger.debug("Cache entry stored", stage="CACHE.SET", key=key, ttl=ttl)
            return CacheResult(CacheOutcome.STORED)

        except Exception as e:
            logger.warning(
                "Cache write failed",
                stage="CACHE.SET",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CacheResult(CacheOutcome.ERROR, error=str(e))

    # -------------------------------------------------------------------------
    # Invalidation
    # -------------------------------------------------------------------------

    async def invalidate_listings_cache(self) -> CacheResult:
        """
        Remove every listings page and every search result.

        STAGE-CACHE.INVALIDATE: Pattern sweep

        For each pattern, KEYS enumerates the matches and a single DEL removes
        them; DEL is skipped when nothing matches. Detail entries are left to
        invalidate_listing_detail.
        """
        client = self._provider.get_client()
        if client is None:
            return CacheResult(CacheOutcome.DISABLED)

        deleted = 0
        try:
            for pattern in CachePatterns.BULK_INVALIDATION:
                keys = await client.keys(pattern)
                if keys:
                    deleted += await client.delete(*keys)

        except Exception as e:
            logger.warning(
                "Listings cache invalidation failed",
                stage="CACHE.INVALIDATE",
                deleted=deleted,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CacheResult(CacheOutcome.ERROR, deleted=deleted, error=str(e))

        log_stage(logger, "CACHE.INVALIDATE", "Listings cache invalidated", deleted=deleted)
        return CacheResult(CacheOutcome.INVALIDATED, deleted=deleted)

    async def invalidate_listing_detail(self, listing_id: str) -> CacheResult:
        client = self._provider.get_client()
        if client is None:
            return CacheResult(CacheOutcome.DISABLED)

        key = CacheKeys.listing_detail(listing_id)
        try:
            deleted = await client.delete(key)
        except Exception as e:
            logger.warning(
                "Listing detail invalidation failed",
                stage="CACHE.INVALIDATE",
                key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            return CacheResult(CacheOutcome.ERROR, error=str(e))

        logger.debug("Listing detail invalidated", stage="CACHE.INVALIDATE", key=key)
        return CacheResult(CacheOutcome.INVALIDATED, deleted=deleted)

    # -------------------------------------------------------------------------
    # Metrics and monitoring
    # -------------------------------------------------------------------------

    async def get_cache_metrics(self) -> CacheMetrics | None:
        """
        Read the hit/miss counters.

        STAGE-CACHE.METRICS: Counter snapshot

        Returns:
            CacheMetrics, or None when no backend is configured

        Raises:
            CacheError: If the backend call fails
        """
        client = self._provider.get_client()
        if client is None:
            return None

        hits = _counter_value(await client.get(CacheKeys.cache_hits()))
        misses = _counter_value(await client.get(CacheKeys.cache_misses()))
        return CacheMetrics.from_counters(hits, misses)

    async def get_redis_info(self) -> dict[str, Any] | None:
        """
        Backend status summary for the metrics endpoint.

        Returns:
            ``{"status": "connected", "metrics": {...}, "timestamp": ...}``
            or None when no backend is configured

        Raises:
            CacheError: If the backend call fails
        """
        metrics = await self.get_cache_metrics()
        if metrics is None:
            return None

        return {
            "status": CacheStatus.CONNECTED.value,
            "metrics": metrics.to_dict(),
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }

    async def reset_cache_metrics(self) -> CacheResult:
        """Delete both counters. They otherwise persist until reset."""
        client = self._provider.get_client()
        if client is None:
            return CacheResult(CacheOutcome.DISABLED)

        try:
            deleted = await client.delete(CacheKeys.cache_hits(), CacheKeys.cache_misses())
        except Exception as e:
            logger.warning(
                "Cache metrics reset failed",
                stage="CACHE.METRICS",
                error=str(e),
                error_type=type(e).__name__,
            )
            return CacheResult(CacheOutcome.ERROR, error=str(e))

        log_stage(logger, "CACHE.METRICS", "Cache metrics reset", deleted=deleted)
        return CacheResult(CacheOutcome.INVALIDATED, deleted=deleted)

    async def health_check(self) -> dict[str, Any]:
        """
        Ping the backend.

        Returns:
            Dict with ``status`` (connected / disabled / unreachable) and,
            when reachable, the ping latency in milliseconds
        """
        client = self._provider.get_client()
        if client is None:
            return {"status": CacheStatus.DISABLED.value}

        try:
            start = time.perf_counter()
            await client.ping()
            latency = (time.perf_counter() - start) * 1000
        except (CacheError, OSError) as e:
            return {"status": CacheStatus.UNREACHABLE.value, "error": str(e)}

        return {"status": CacheStatus.CONNECTED.value, "ping_latency_ms": round(latency, 2)}
