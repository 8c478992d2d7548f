"""
Unit Tests for Health Routes and Application Lifecycle
"""

import pytest
from fastapi.testclient import TestClient

from listings_cache.application.app import create_app
from listings_cache.core.exceptions import CacheConfigurationError
from listings_cache.infrastructure.cache.redis_client import RedisClientProvider
from tests.test_fixtures.cache_factory import CacheTestFactory, FakeClientProvider


@pytest.mark.unit
class TestHealthRoutes:
    """Test suite for health check routes."""

    def test_healthy_with_cache_connected(self, api_client):
        response = api_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["components"]["cache"]["status"] == "connected"
        assert data["timestamp"].endswith("Z")

    def test_healthy_with_cache_disabled(self, make_client):
        client = make_client(FakeClientProvider(None))

        data = client.get("/api/health").json()

        assert data["status"] == "healthy"
        assert data["components"]["cache"] == {"status": "disabled"}

    def test_degraded_with_cache_unreachable(self, make_client):
        client = make_client(FakeClientProvider(CacheTestFactory.failing_backend()))

        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["components"]["cache"]["status"] == "unreachable"

    def test_liveness(self, api_client):
        response = api_client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_root(self, api_client):
        data = api_client.get("/").json()

        assert data["name"] == "Listings Cache Service"
        assert data["health"] == "/api/health"


@pytest.mark.unit
class TestApplicationLifecycle:
    """Test startup and shutdown wiring."""

    def test_client_resolved_at_startup(self, make_client, client_provider):
        make_client(client_provider)

        assert client_provider.get_client_calls >= 1

    def test_provider_closed_on_shutdown(self, test_settings, client_provider, listing_store):
        app = create_app(settings=test_settings, client_provider=client_provider, listing_store=listing_store)

        with TestClient(app):
            assert client_provider.closed is False

        assert client_provider.closed is True

    def test_malformed_backend_url_aborts_startup(self, make_settings, listing_store):
        settings = make_settings(REDIS_URL="ftp://cache.example.com", REDIS_TOKEN="token")
        app = create_app(
            settings=settings,
            client_provider=RedisClientProvider(settings),
            listing_store=listing_store,
        )

        with pytest.raises(CacheConfigurationError):
            with TestClient(app):
                pass

    def test_routes_fail_without_lifespan(self, test_settings, client_provider):
        app = create_app(settings=test_settings, client_provider=client_provider)
        client = TestClient(app)

        response = client.get("/api/listings/search")

        assert response.status_code == 500
        assert response.json()["error_type"] == "RuntimeError"
