"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory, FakeClientProvider, FakeClock, RecordingBackend
from .listing_factory import ListingFactory

__all__ = [
    "CacheTestFactory",
    "FakeClientProvider",
    "FakeClock",
    "ListingFactory",
    "RecordingBackend",
]
