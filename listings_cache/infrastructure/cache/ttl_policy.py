"""
TTL Policy

Maps each cache entry class to its lifetime in seconds. The lifetime belongs
to the class; callers never pass a TTL for an individual entry.
"""

from dataclasses import dataclass

from listings_cache.core.config.constants import (
    LISTING_DETAIL_TTL,
    LISTINGS_PAGE_TTL,
    LISTINGS_SEARCH_TTL,
    EntryClass,
)


@dataclass(frozen=True)
class TTLPolicy:
    """
    Immutable TTL table.

    STAGE-2: Cache TTL configuration

    Usage:
        policy = TTLPolicy.from_settings(get_settings())
        policy.ttl_for(EntryClass.LISTING_DETAIL)  # 3600
    """

    listings_page: int = LISTINGS_PAGE_TTL
    listing_detail: int = LISTING_DETAIL_TTL
    search_result: int = LISTINGS_SEARCH_TTL

    def __post_init__(self):
        for entry_class in EntryClass:
            if self.ttl_for(entry_class) <= 0:
                raise ValueError(f"TTL for {entry_class.value} must be positive")

    def ttl_for(self, entry_class: EntryClass) -> int:
        if entry_class is EntryClass.LISTINGS_PAGE:
            return self.listings_page
        if entry_class is EntryClass.LISTING_DETAIL:
            return self.listing_detail
        if entry_class is EntryClass.SEARCH_RESULT:
            return self.search_result
        raise ValueError(f"Unknown entry class: {entry_class!r}")

    @classmethod
    def from_settings(cls, settings) -> "TTLPolicy":
        cache = settings.cache
        return cls(
            listings_page=cache.CACHE_TTL_LISTINGS_PAGE,
            listing_detail=cache.CACHE_TTL_LISTING_DETAIL,
            search_result=cache.CACHE_TTL_LISTINGS_SEARCH,
        )
