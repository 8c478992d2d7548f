"""
Listing Service - Educational Documentation
===========================================

WHAT IS THE LISTING SERVICE?
----------------------------
The ListingService sits between the HTTP routes and two collaborators: the
primary listing store (source of truth) and the listings cache (a disposable
projection of it). Routes never talk to the cache directly.

READ PATH (search, detail, page):
---------------------------------
┌─────────────────────────────────────────────────────────────────┐
│ 1. Derive the cache subject (search hash, listing id, page no.) │
│ 2. Cached read → HIT: return the stored payload as-is           │
│ 3. MISS / DISABLED / ERROR: query the primary store             │
│ 4. Populate the cache with the store's payload                  │
│    (deferred to a background task when the caller provides one) │
└─────────────────────────────────────────────────────────────────┘

WRITE PATH (create, update, delete, status change):
---------------------------------------------------
┌─────────────────────────────────────────────────────────────────┐
│ 1. Mutate the primary store                                     │
│ 2. Only after it succeeded: invalidate                          │
│    - create            → pages + searches                       │
│    - update / delete / │                                        │
│      status change     → pages + searches + this detail entry   │
└─────────────────────────────────────────────────────────────────┘

Invalidation never precedes the write, and a failed write invalidates nothing.

Cache failures never surface here: the cache service resolves them to a miss
or a no-op, so the store answer is always returned.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from listings_cache.core.exceptions import ListingNotFoundError
from listings_cache.core.logging.logger import get_logger, log_stage
from listings_cache.infrastructure.cache.cache_service import ListingsCacheService
from listings_cache.infrastructure.cache.search_hash import create_search_hash
from listings_cache.listings.models.listing import (
    Listing,
    ListingCreate,
    ListingSearchParams,
    ListingStatus,
    ListingUpdate,
)
from listings_cache.listings.store.base_store import ListingStore

logger = get_logger(__name__)

# Schedules ``fn(*args)`` to run later, e.g. BackgroundTasks.add_task
Deferrer = Callable[..., None]


@dataclass(frozen=True)
class CachedRead:
    """
    Payload served to the client and where it came from.

    ``payload`` is the JSON-ready dict; on a hit it is exactly what was
    stored on the preceding miss.
    """

    payload: Any
    hit: bool


class ListingService:
    """
    Read-through listings access with invalidate-after-write mutations.

    Usage:
        service = ListingService(store, cache_service, default_page_size=20)
        read = await service.search(params, defer=background_tasks.add_task)
        listing = await service.update(listing_id, ListingUpdate(title="New"))
    """

    def __init__(
        self,
        store: ListingStore,
        cache: ListingsCacheService,
        default_page_size: int = 20,
    ):
        self._store = store
        self._cache = cache
        self._default_page_size = default_page_size

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def search(self, params: ListingSearchParams, defer: Deferrer | None = None) -> CachedRead:
        search_hash = create_search_hash(params.cache_params())

        cached = await self._cache.get_cached_search(search_hash)
        if cached.hit:
            return CachedRead(cached.value, hit=True)

        result = await self._store.search(params)
        payload = result.to_payload()
        await self._populate(defer, self._cache.set_cached_search, search_hash, payload)

        log_stage(
            logger,
            "LISTINGS.SEARCH",
            "Search served from store",
            search_hash=search_hash,
            total=result.total,
            cache_outcome=cached.outcome.value,
        )
        return CachedRead(payload, hit=False)

    async def list_page(self, page: int, defer: Deferrer | None = None) -> CachedRead:
        """Default-sorted page of active listings, cached per page number."""
        cached = await self._cache.get_cached_listings_page(page)
        if cached.hit:
            return CachedRead(cached.value, hit=True)

        params = ListingSearchParams(page=page, limit=self._default_page_size)
        payload = (await self._store.search(params)).to_payload()
        await self._populate(defer, self._cache.set_cached_listings_page, page, payload)
        return CachedRead(payload, hit=False)

    async def get_detail(self, listing_id: str, defer: Deferrer | None = None) -> CachedRead:
        """
        Raises:
            ListingNotFoundError: If the store has no such listing
        """
        cached = await self._cache.get_cached_listing_detail(listing_id)
        if cached.hit:
            return CachedRead(cached.value, hit=True)

        listing = await self._store.get(listing_id)
        if listing is None:
            raise ListingNotFoundError(
                f"Listing {listing_id} not found", details={"listing_id": listing_id}
            )

        payload = listing.model_dump(mode="json")
        await self._populate(defer, self._cache.set_cached_listing_detail, listing_id, payload)
        return CachedRead(payload, hit=False)

    @staticmethod
    async def _populate(defer: Deferrer | None, write, *args) -> None:
        if defer is not None:
            defer(write, *args)
        else:
            await write(*args)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create(self, data: ListingCreate) -> Listing:
        listing = await self._store.create(data)
        await self._cache.invalidate_listings_cache()
        return listing

    async def update(self, listing_id: str, data: ListingUpdate) -> Listing:
        listing = await self._store.update(listing_id, data)
        await self._invalidate_listing(listing_id)
        return listing

    async def set_status(self, listing_id: str, status: ListingStatus) -> Listing:
        listing = await self._store.set_status(listing_id, status)
        await self._invalidate_listing(listing_id)
        return listing

    async def delete(self, listing_id: str) -> None:
        await self._store.delete(listing_id)
        await self._invalidate_listing(listing_id)

    async def _invalidate_listing(self, listing_id: str) -> None:
        await self._cache.invalidate_listings_cache()
        await self._cache.invalidate_listing_detail(listing_id)
