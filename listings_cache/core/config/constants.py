"""
System Constants and Enumerations

This module defines system-wide constants and enumerations used across
the listings cache service.

Architectural Decision: Centralized constants for maintainability
- Single source of truth for key namespaces and TTL defaults
- Type-safe enums for entry classes and cache outcomes
- Easy to update and track changes

Author: System Architect
Date: 2025-12-05
"""

from enum import Enum

# ============================================================================
# Cache Entry Classes
# ============================================================================


class EntryClass(str, Enum):
    """
    Cached subject types.

    Each entry class maps to exactly one TTL (see TTLPolicy). The TTL is a
    property of the class, never of an individual entry.
    """

    LISTINGS_PAGE = "listings_page"
    LISTING_DETAIL = "listing_detail"
    SEARCH_RESULT = "search_result"


# ============================================================================
# Cache Outcomes
# ============================================================================


class CacheOutcome(str, Enum):
    """
    Result of a single cache service operation.

    HIT / MISS: read-through lookups
    STORED: value written with its class TTL
    INVALIDATED: keys deleted (possibly zero of them)
    DISABLED: no backend configured, operation skipped
    ERROR: backend call failed, treated as miss / no-op
    """

    HIT = "hit"
    MISS = "miss"
    STORED = "stored"
    INVALIDATED = "invalidated"
    DISABLED = "disabled"
    ERROR = "error"


class CacheStatus(str, Enum):
    """Backend status reported by health and info endpoints."""

    CONNECTED = "connected"
    DISABLED = "disabled"
    UNREACHABLE = "unreachable"


# ============================================================================
# Cache Key Namespaces
# ============================================================================

KEY_SEPARATOR = ":"

KEY_PREFIX_LISTINGS = "listings"
KEY_PREFIX_LISTINGS_PAGE = "listings:all:page"
KEY_PREFIX_LISTING_DETAIL = "listings:detail"
KEY_PREFIX_LISTINGS_SEARCH = "listings:search"

KEY_CACHE_HITS = "cache:metrics:hits"
KEY_CACHE_MISSES = "cache:metrics:misses"

# ============================================================================
# TTL Defaults (seconds)
# ============================================================================

LISTINGS_PAGE_TTL = 900  # 15 minutes
LISTING_DETAIL_TTL = 3600  # 1 hour
LISTINGS_SEARCH_TTL = 900  # 15 minutes

# ============================================================================
# Listings Query Defaults
# ============================================================================

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# ============================================================================
# HTTP Headers
# ============================================================================

HEADER_REQUEST_ID = "X-Request-ID"
HEADER_CACHE = "X-Cache"
HEADER_CACHE_CONTROL = "Cache-Control"

CACHE_HEADER_HIT = "HIT"
CACHE_HEADER_MISS = "MISS"
