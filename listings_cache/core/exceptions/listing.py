"""
Listing-Related Exceptions

Errors raised by the listings store and listing service.

Author: System Architect
Date: 2025-12-08
"""

from listings_cache.core.exceptions.base import ListingsCacheBaseError


class ListingError(ListingsCacheBaseError):
    """Base exception for listing errors."""
    pass


class ListingNotFoundError(ListingError):
    """Raised when a listing id does not exist in the primary store."""
    pass


class ListingValidationError(ListingError):
    """Raised when a listing payload or search parameter is rejected."""
    pass
