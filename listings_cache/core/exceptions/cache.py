"""
Cache-Related Exceptions

All exceptions related to the cache backend and its client accessor.

Only CacheConfigurationError is allowed to cross the cache service boundary;
the others are raised by the command layer and absorbed by the service.

Author: System Architect
Date: 2025-12-08
"""

from listings_cache.core.exceptions.base import ConfigurationError, ListingsCacheBaseError


class CacheError(ListingsCacheBaseError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when the cache backend cannot be reached.

    Common causes:
    - Backend is down
    - Network connectivity issues
    - Authentication failure (bad token)
    - Socket timeout
    """
    pass


class CacheKeyError(CacheError):
    """
    Raised when a cache command fails on an otherwise healthy connection.

    Common causes:
    - Wrong value type stored under the key (e.g. INCR on a non-integer)
    - Command rejected by the backend
    - Memory limit exceeded
    """
    pass


class CacheConfigurationError(CacheError, ConfigurationError):
    """
    Raised when the connection handle itself cannot be constructed.

    This is an operator error (malformed endpoint URL, unsupported scheme),
    not a transient condition, so it is propagated instead of degraded.
    """
    pass
