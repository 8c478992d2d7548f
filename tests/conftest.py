"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tests.test_fixtures.cache_factory import (  # noqa: E402
    CacheTestFactory,
    FakeClientProvider,
    RecordingBackend,
)
from tests.test_fixtures.listing_factory import ListingFactory  # noqa: E402

# pytest-asyncio is automatically loaded via pyproject.toml configuration
# (asyncio_mode = "auto")


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def make_settings():
    """
    Build Settings without reading a .env file.

    Usage:
        settings = make_settings(REDIS_URL="redis://localhost:6379", REDIS_TOKEN="t")
    """
    from listings_cache.core.config.settings import Settings

    def _make(**overrides):
        values = {"REDIS_URL": None, "REDIS_TOKEN": None, "LOG_FORMAT": "console"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def test_settings(make_settings):
    """Settings with no cache backend configured."""
    return make_settings()


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def backend():
    """In-memory key-value backend that records commands."""
    return RecordingBackend()


@pytest.fixture
def client_provider(backend):
    return FakeClientProvider(backend)


@pytest.fixture
def cache_service(backend):
    """ListingsCacheService over the in-memory backend."""
    return CacheTestFactory.cache_service(backend)


@pytest.fixture
def disabled_cache_service():
    """ListingsCacheService with no backend configured."""
    return CacheTestFactory.cache_service(None)


@pytest.fixture
def failing_backend():
    return CacheTestFactory.failing_backend()


# ============================================================================
# Listings Fixtures
# ============================================================================


@pytest.fixture
def sample_listings():
    return ListingFactory.sample_listings()


@pytest.fixture
def listing_store(sample_listings):
    from listings_cache.listings.store.memory_store import InMemoryListingStore

    return InMemoryListingStore(sample_listings)


@pytest.fixture
def listing_service(listing_store, cache_service):
    from listings_cache.listings.services.listing_service import ListingService

    return ListingService(listing_store, cache_service)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def make_client(test_settings, listing_store):
    """
    Build a TestClient for an app wired to the given client provider.

    The client is entered as a context manager so the lifespan runs.
    """
    from fastapi.testclient import TestClient

    from listings_cache.application.app import create_app

    clients = []

    def _make(provider, settings=None, store=None):
        app = create_app(
            settings=settings or test_settings,
            client_provider=provider,
            listing_store=store if store is not None else listing_store,
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def api_client(make_client, client_provider):
    """TestClient backed by the in-memory cache backend."""
    return make_client(client_provider)
