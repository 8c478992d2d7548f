"""
Cache Key Builder

Every key the listings cache reads, writes or deletes is produced here.

Key layout:
    listings:all:page:<page>     paginated listings page
    listings:detail:<id>         single listing detail
    listings:search:<hash>       search result for a parameter hash
    cache:metrics:hits           hit counter
    cache:metrics:misses         miss counter

The counter keys live outside the ``listings:`` namespace, so no listings
wildcard ever matches them.
"""

from listings_cache.core.config.constants import (
    KEY_CACHE_HITS,
    KEY_CACHE_MISSES,
    KEY_PREFIX_LISTING_DETAIL,
    KEY_PREFIX_LISTINGS,
    KEY_PREFIX_LISTINGS_PAGE,
    KEY_PREFIX_LISTINGS_SEARCH,
    KEY_SEPARATOR,
)


def _join(prefix: str, suffix: object) -> str:
    return f"{prefix}{KEY_SEPARATOR}{suffix}"


class CacheKeys:
    """Pure, total key constructors."""

    @staticmethod
    def listings_page(page: int) -> str:
        return _join(KEY_PREFIX_LISTINGS_PAGE, page)

    @staticmethod
    def listing_detail(listing_id: str) -> str:
        return _join(KEY_PREFIX_LISTING_DETAIL, listing_id)

    @staticmethod
    def listings_search(search_hash: str) -> str:
        return _join(KEY_PREFIX_LISTINGS_SEARCH, search_hash)

    @staticmethod
    def cache_hits() -> str:
        return KEY_CACHE_HITS

    @staticmethod
    def cache_misses() -> str:
        return KEY_CACHE_MISSES


class CachePatterns:
    """Glob patterns used by bulk invalidation."""

    ALL_LISTINGS = _join(KEY_PREFIX_LISTINGS, "*")
    ALL_LISTINGS_PAGES = _join(KEY_PREFIX_LISTINGS_PAGE, "*")
    ALL_SEARCHES = _join(KEY_PREFIX_LISTINGS_SEARCH, "*")

    # Order matters: pages are swept before searches.
    BULK_INVALIDATION = (ALL_LISTINGS_PAGES, ALL_SEARCHES)


listings_page_key = CacheKeys.listings_page
listing_detail_key = CacheKeys.listing_detail
listings_search_key = CacheKeys.listings_search
cache_hits_key = CacheKeys.cache_hits
cache_misses_key = CacheKeys.cache_misses
