from .listing import (
    Listing,
    ListingCreate,
    ListingSearchParams,
    ListingSearchResult,
    ListingStatus,
    ListingStatusUpdate,
    ListingUpdate,
)

__all__ = [
    "Listing",
    "ListingCreate",
    "ListingSearchParams",
    "ListingSearchResult",
    "ListingStatus",
    "ListingStatusUpdate",
    "ListingUpdate",
]
