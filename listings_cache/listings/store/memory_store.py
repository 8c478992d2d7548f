"""
In-memory listing store for development and tests.

Implements the ListingStore protocol over a dict. Not shared across workers.
"""

import asyncio
from datetime import datetime, timezone

from listings_cache.core.exceptions import ListingNotFoundError
from listings_cache.core.logging import get_logger
from listings_cache.listings.models.listing import (
    Listing,
    ListingCreate,
    ListingSearchParams,
    ListingSearchResult,
    ListingStatus,
    ListingUpdate,
)

logger = get_logger(__name__)

_SORT_KEYS = {
    "price": lambda listing: listing.rent_xlm,
    "created_at": lambda listing: listing.created_at,
    "bedrooms": lambda listing: listing.bedrooms,
    "bathrooms": lambda listing: listing.bathrooms,
    "views": lambda listing: listing.views,
    "favorites": lambda listing: listing.favorites,
    "recommended": lambda listing: (listing.favorites, listing.views),
}


def _matches(listing: Listing, params: ListingSearchParams) -> bool:
    if listing.status is not ListingStatus.ACTIVE:
        return False
    if params.min_price is not None and listing.rent_xlm < params.min_price:
        return False
    if params.max_price is not None and listing.rent_xlm > params.max_price:
        return False
    if params.bedrooms is not None and listing.bedrooms < params.bedrooms:
        return False
    if params.bathrooms is not None and listing.bathrooms < params.bathrooms:
        return False
    if params.location and params.location.lower() not in listing.address.lower():
        return False
    if params.amenities:
        have = {amenity.lower() for amenity in listing.amenities}
        if not all(amenity.lower() in have for amenity in params.amenities):
            return False
    if params.search:
        haystack = f"{listing.title} {listing.description or ''}".lower()
        if params.search.lower() not in haystack:
            return False
    return True


class InMemoryListingStore:
    """
    Dict-backed ListingStore.

    Search semantics:
    - only ACTIVE listings are returned
    - bedrooms / bathrooms are minimums, prices are inclusive bounds
    - location and search are case-insensitive substring matches
    - every requested amenity must be present
    - "recommended" sorts by favorites, then views
    """

    def __init__(self, listings: list[Listing] | None = None):
        self._listings: dict[str, Listing] = {listing.id: listing for listing in listings or []}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._listings)

    async def search(self, params: ListingSearchParams) -> ListingSearchResult:
        matched = [listing for listing in self._listings.values() if _matches(listing, params)]
        matched.sort(key=_SORT_KEYS[params.sort_by], reverse=params.order == "desc")

        start = (params.page - 1) * params.limit
        page_items = matched[start:start + params.limit]
        return ListingSearchResult.paginate(page_items, len(matched), params.page, params.limit)

    async def get(self, listing_id: str) -> Listing | None:
        return self._listings.get(listing_id)

    async def create(self, data: ListingCreate) -> Listing:
        listing = Listing(**data.model_dump())
        async with self._lock:
            self._listings[listing.id] = listing
        logger.info("Listing created", stage="STORE.CREATE", listing_id=listing.id)
        return listing

    async def update(self, listing_id: str, data: ListingUpdate) -> Listing:
        changes = data.model_dump(exclude_unset=True)
        return await self._replace(listing_id, **changes)

    async def delete(self, listing_id: str) -> None:
        async with self._lock:
            if self._listings.pop(listing_id, None) is None:
                raise ListingNotFoundError(
                    f"Listing {listing_id} not found", details={"listing_id": listing_id}
                )
        logger.info("Listing deleted", stage="STORE.DELETE", listing_id=listing_id)

    async def set_status(self, listing_id: str, status: ListingStatus) -> Listing:
        return await self._replace(listing_id, status=status)

    async def _replace(self, listing_id: str, **changes) -> Listing:
        async with self._lock:
            current = self._listings.get(listing_id)
            if current is None:
                raise ListingNotFoundError(
                    f"Listing {listing_id} not found", details={"listing_id": listing_id}
                )
            updated = Listing.model_validate(
                {**current.model_dump(), **changes, "updated_at": datetime.now(timezone.utc)}
            )
            self._listings[listing_id] = updated
        logger.info(
            "Listing updated", stage="STORE.UPDATE", listing_id=listing_id, fields=sorted(changes)
        )
        return updated
