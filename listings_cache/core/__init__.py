"""
Core Module

Foundational components: configuration, logging, exceptions and interfaces.
"""

from .exceptions import (
    CacheConfigurationError,
    CacheConnectionError,
    CacheError,
    CacheKeyError,
    ConfigurationError,
    ListingError,
    ListingNotFoundError,
    ListingsCacheBaseError,
    ListingValidationError,
)
from .logging import (
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    set_request_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    "log_stage",
    "ListingsCacheBaseError",
    "ConfigurationError",
    "CacheError",
    "CacheConnectionError",
    "CacheKeyError",
    "CacheConfigurationError",
    "ListingError",
    "ListingNotFoundError",
    "ListingValidationError",
]
