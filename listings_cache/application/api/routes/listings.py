"""
Listings Routes - Educational Documentation
===========================================

READ ENDPOINTS AND HTTP CACHING:
--------------------------------
Every read endpoint answers with two headers:

- ``X-Cache: HIT`` or ``X-Cache: MISS``: whether the body came from the
  listings cache or from the primary store
- ``Cache-Control: public, max-age=<ttl>``: lets browsers and CDNs keep the
  response for as long as the server-side cache would

On a MISS the body is returned first and the cache is populated afterwards in
a FastAPI background task, so populating never adds latency to the response.
A HIT returns the exact payload that was stored on the preceding MISS.

WRITE ENDPOINTS AND INVALIDATION:
---------------------------------
Create, update, status change and delete go to the primary store first. Only
after the store accepted the write does the listing service invalidate the
listings pages, the search results and (except for create) the listing's
detail entry.

ROUTE ORDER:
------------
``/listings/search`` is declared before ``/listings/{listing_id}``; FastAPI
matches routes in declaration order and "search" would otherwise be taken
as a listing id.
"""

from fastapi import APIRouter, BackgroundTasks, Query, Response, status
from fastapi.responses import JSONResponse

from listings_cache.application.api.dependencies import (
    CacheServiceDep,
    ListingServiceDep,
    SettingsDep,
)
from listings_cache.core.config.constants import (
    CACHE_HEADER_HIT,
    CACHE_HEADER_MISS,
    HEADER_CACHE,
    HEADER_CACHE_CONTROL,
    EntryClass,
)
from listings_cache.core.exceptions import ListingValidationError
from listings_cache.listings.models.listing import (
    Listing,
    ListingCreate,
    ListingSearchParams,
    ListingStatusUpdate,
    ListingUpdate,
    SortField,
    SortOrder,
)
from listings_cache.listings.services.listing_service import CachedRead

router = APIRouter(prefix="/listings", tags=["Listings"])


def _cached_response(read: CachedRead, max_age: int) -> JSONResponse:
    return JSONResponse(
        content=read.payload,
        headers={
            HEADER_CACHE: CACHE_HEADER_HIT if read.hit else CACHE_HEADER_MISS,
            HEADER_CACHE_CONTROL: f"public, max-age={max_age}",
        },
    )


# ============================================================================
# READS
# ============================================================================


@router.get("")
async def list_listings(
    service: ListingServiceDep,
    cache: CacheServiceDep,
    background_tasks: BackgroundTasks,
    page: int = Query(default=1, ge=1),
):
    """Default-sorted page of active listings (cached per page number)."""
    read = await service.list_page(page, defer=background_tasks.add_task)
    return _cached_response(read, cache.ttl_policy.ttl_for(EntryClass.LISTINGS_PAGE))


@router.get("/search")
async def search_listings(
    service: ListingServiceDep,
    cache: CacheServiceDep,
    settings: SettingsDep,
    background_tasks: BackgroundTasks,
    min_price: float | None = Query(default=None, alias="minPrice", ge=0),
    max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
    location: str | None = Query(default=None),
    radius: str | None = Query(default=None),
    bedrooms: int | None = Query(default=None, ge=0),
    bathrooms: int | None = Query(default=None, ge=0),
    amenities: list[str] | None = Query(default=None),
    search: str | None = Query(default=None),
    sort_by: SortField = Query(default="created_at", alias="sortBy"),
    order: SortOrder = Query(default="desc"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
):
    """
    Search active listings.

    Query parameters use the camelCase names clients already send
    (``minPrice``, ``sortBy``). ``amenities`` may be repeated or
    comma-separated. Parameter order never affects the cache key.

    HTTP Status Codes:
        200: Results (from cache or store)
        422: Invalid parameter (e.g. limit above LISTINGS_MAX_PAGE_SIZE)
    """
    max_page_size = settings.listings.LISTINGS_MAX_PAGE_SIZE
    if limit is not None and limit > max_page_size:
        raise ListingValidationError(
            f"limit must be at most {max_page_size}",
            details={"limit": limit, "max": max_page_size},
        )
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ListingValidationError(
            "minPrice must not exceed maxPrice",
            details={"minPrice": min_price, "maxPrice": max_price},
        )

    params = ListingSearchParams(
        min_price=min_price,
        max_price=max_price,
        location=location,
        radius=radius,
        bedrooms=bedrooms,
        bathrooms=bathrooms,
        amenities=amenities,
        search=search,
        sort_by=sort_by,
        order=order,
        page=page,
        limit=limit or settings.listings.LISTINGS_DEFAULT_PAGE_SIZE,
    )

    read = await service.search(params, defer=background_tasks.add_task)
    return _cached_response(read, cache.ttl_policy.ttl_for(EntryClass.SEARCH_RESULT))


@router.get("/{listing_id}")
async def get_listing(
    listing_id: str,
    service: ListingServiceDep,
    cache: CacheServiceDep,
    background_tasks: BackgroundTasks,
):
    """
    Single listing detail.

    HTTP Status Codes:
        200: Listing (from cache or store)
        404: No listing with this id
    """
    read = await service.get_detail(listing_id, defer=background_tasks.add_task)
    return _cached_response(read, cache.ttl_policy.ttl_for(EntryClass.LISTING_DETAIL))


# ============================================================================
# MUTATIONS
# ============================================================================


@router.post("", response_model=Listing, status_code=status.HTTP_201_CREATED)
async def create_listing(data: ListingCreate, service: ListingServiceDep):
    return await service.create(data)


@router.patch("/{listing_id}", response_model=Listing)
async def update_listing(listing_id: str, data: ListingUpdate, service: ListingServiceDep):
    return await service.update(listing_id, data)


@router.patch("/{listing_id}/status", response_model=Listing)
async def update_listing_status(
    listing_id: str, data: ListingStatusUpdate, service: ListingServiceDep
):
    return await service.set_status(listing_id, data.status)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(listing_id: str, service: ListingServiceDep):
    await service.delete(listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
