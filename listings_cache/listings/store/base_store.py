#!/usr/bin/env python3
"""
Listing Store Port

The primary store is the source of truth for listings. Production deployments
back it with a managed database; this module only fixes the contract the
listing service depends on.

Author: System Architect
Date: 2025-12-10
"""

from typing import Protocol, runtime_checkable

from listings_cache.listings.models.listing import (
    Listing,
    ListingCreate,
    ListingSearchParams,
    ListingSearchResult,
    ListingStatus,
    ListingUpdate,
)


@runtime_checkable
class ListingStore(Protocol):
    """
    Protocol for primary listing storage.

    Mutating methods raise ListingNotFoundError for unknown ids.
    """

    async def search(self, params: ListingSearchParams) -> ListingSearchResult:
        """Filter, sort and paginate active listings."""
        ...

    async def get(self, listing_id: str) -> Listing | None:
        """Get a listing by id, regardless of status."""
        ...

    async def create(self, data: ListingCreate) -> Listing:
        ...

    async def update(self, listing_id: str, data: ListingUpdate) -> Listing:
        """Apply the fields set on ``data`` and bump ``updated_at``."""
        ...

    async def delete(self, listing_id: str) -> None:
        ...

    async def set_status(self, listing_id: str, status: ListingStatus) -> Listing:
        ...
