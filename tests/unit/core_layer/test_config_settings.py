"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import pytest
from pydantic import ValidationError

from listings_cache.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default values and grouped views."""

    def test_cache_backend_absent_by_default(self, test_settings):
        assert test_settings.redis.REDIS_URL is None
        assert test_settings.redis.REDIS_TOKEN is None

    def test_ttl_defaults(self, test_settings):
        assert test_settings.cache.CACHE_TTL_LISTINGS_PAGE == 900
        assert test_settings.cache.CACHE_TTL_LISTING_DETAIL == 3600
        assert test_settings.cache.CACHE_TTL_LISTINGS_SEARCH == 900

    def test_listings_defaults(self, test_settings):
        assert test_settings.listings.LISTINGS_DEFAULT_PAGE_SIZE == 20
        assert test_settings.listings.LISTINGS_MAX_PAGE_SIZE == 100

    def test_app_defaults(self, test_settings):
        assert test_settings.app.APP_NAME == "Listings Cache Service"
        assert test_settings.app.API_BASE_PATH == "/api"
        assert test_settings.app.ENVIRONMENT in ["development", "staging", "production"]

    def test_logging_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.logging.LOG_LEVEL in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        assert settings.logging.LOG_FORMAT in ["json", "console"]


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Test environment variable loading."""

    def test_redis_values_from_env(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "rediss://cache.example.com:6379")
        monkeypatch.setenv("REDIS_TOKEN", "env-token")

        settings = Settings(_env_file=None)

        assert settings.redis.REDIS_URL == "rediss://cache.example.com:6379"
        assert settings.redis.REDIS_TOKEN == "env-token"

    def test_hosted_provider_aliases(self, monkeypatch):
        monkeypatch.delenv("REDIS_URL", raising=False)
        monkeypatch.delenv("REDIS_TOKEN", raising=False)
        monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "rediss://hosted.example.com:6379")
        monkeypatch.setenv("UPSTASH_REDIS_REST_TOKEN", "hosted-token")

        settings = Settings(_env_file=None)

        assert settings.REDIS_URL == "rediss://hosted.example.com:6379"
        assert settings.REDIS_TOKEN == "hosted-token"

    def test_ttl_override_from_env(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_LISTING_DETAIL", "120")

        settings = Settings(_env_file=None)

        assert settings.cache.CACHE_TTL_LISTING_DETAIL == 120


@pytest.mark.unit
class TestSettingsValidation:
    """Test validators."""

    def test_log_level_normalized(self, make_settings):
        assert make_settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(LOG_LEVEL="CHATTY")

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_rejected(self, make_settings, ttl):
        with pytest.raises(ValidationError):
            make_settings(CACHE_TTL_LISTINGS_SEARCH=ttl)

    def test_invalid_environment_rejected(self, make_settings):
        with pytest.raises(ValidationError):
            make_settings(ENVIRONMENT="qa")


@pytest.mark.unit
class TestSettingsSingleton:
    """Test get_settings / reload_settings."""

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        before = get_settings()
        after = reload_settings()

        assert after is not before
        assert get_settings() is after
