"""
Exception Module

Structured exception hierarchy for the listings cache service.
All exceptions are organized by theme for better maintainability and debuggability.

Module Structure:
-----------------
- **base.py**: ListingsCacheBaseError base class + ConfigurationError
- **cache.py**: Cache backend exceptions
- **listing.py**: Listings store and service exceptions

Usage:
------
```python
# Import specific exceptions
from listings_cache.core.exceptions import CacheConnectionError, ListingNotFoundError

# Or import by category
from listings_cache.core.exceptions.cache import CacheError, CacheKeyError
```

Author: System Architect
Date: 2025-12-08
"""

# Base exception
from listings_cache.core.exceptions.base import ConfigurationError, ListingsCacheBaseError

# Cache exceptions
from listings_cache.core.exceptions.cache import (
    CacheConfigurationError,
    CacheConnectionError,
    CacheError,
    CacheKeyError,
)

# Listing exceptions
from listings_cache.core.exceptions.listing import (
    ListingError,
    ListingNotFoundError,
    ListingValidationError,
)

__all__ = [
    # Base
    "ListingsCacheBaseError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "CacheConfigurationError",
    # Listings
    "ListingError",
    "ListingNotFoundError",
    "ListingValidationError",
]
