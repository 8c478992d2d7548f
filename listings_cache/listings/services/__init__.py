from .listing_service import CachedRead, ListingService

__all__ = ["CachedRead", "ListingService"]
