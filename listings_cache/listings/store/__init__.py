from .base_store import ListingStore
from .memory_store import InMemoryListingStore

__all__ = ["ListingStore", "InMemoryListingStore"]
