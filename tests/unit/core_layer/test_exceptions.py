"""
Unit Tests for Core Exceptions

Tests the hierarchy and the helper methods on the base exception.
"""

import pytest

from listings_cache.core.exceptions import (
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


@pytest.mark.unit
class TestListingsCacheBaseError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        error = ListingsCacheBaseError("Test message")

        assert str(error) == "Test message"
        assert error.message == "Test message"
        assert error.details == {}
        assert error.request_id is None

    def test_details_are_copied(self):
        details = {"key": "listings:detail:1"}
        error = ListingsCacheBaseError("Test", details=details)

        error.with_suggestion("check Redis")

        assert details == {"key": "listings:detail:1"}
        assert error.details == {"key": "listings:detail:1", "suggestion": "check Redis"}

    def test_to_dict(self):
        error = CacheKeyError("GET failed", request_id="req-1", details={"key": "k"})

        assert error.to_dict() == {
            "error_type": "CacheKeyError",
            "message": "GET failed",
            "request_id": "req-1",
            "details": {"key": "k"},
        }

    def test_with_suggestion_chains(self):
        error = ConfigurationError("bad").with_suggestion("set REDIS_URL")

        assert isinstance(error, ConfigurationError)
        assert error.details["suggestion"] == "set REDIS_URL"

    def test_repr(self):
        error = CacheKeyError("GET failed", request_id="abc-123", details={"key": "k"})

        assert repr(error) == (
            "CacheKeyError(message='GET failed', request_id='abc-123', details={'key': 'k'})"
        )

    def test_from_exception(self):
        original = ValueError("bad url")

        error = CacheConfigurationError.from_exception(original, setting="REDIS_URL")

        assert isinstance(error, CacheConfigurationError)
        assert error.message == "bad url"
        assert error.details == {
            "original_error": "ValueError",
            "original_message": "bad url",
            "setting": "REDIS_URL",
        }

    def test_repr_without_optional_parts(self):
        assert repr(ListingNotFoundError("gone")) == "ListingNotFoundError(message='gone')"

    def test_from_exception_with_message(self):
        original = ConnectionError("Connection refused")

        error = CacheConnectionError.from_exception(original, "Redis GET failed", key="k")

        assert str(error) == "Redis GET failed"
        assert error.request_id is None
        assert error.details["original_message"] == "Connection refused"
        assert error.details["key"] == "k"


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test which handlers catch which errors."""

    @pytest.mark.parametrize("cls", [CacheConnectionError, CacheKeyError, CacheConfigurationError])
    def test_cache_errors(self, cls):
        assert issubclass(cls, CacheError)
        assert issubclass(cls, ListingsCacheBaseError)

    def test_cache_configuration_error_is_configuration_error(self):
        assert issubclass(CacheConfigurationError, ConfigurationError)

    def test_transient_cache_errors_are_not_configuration_errors(self):
        assert not issubclass(CacheConnectionError, ConfigurationError)
        assert not issubclass(CacheKeyError, ConfigurationError)

    @pytest.mark.parametrize("cls", [ListingNotFoundError, ListingValidationError])
    def test_listing_errors(self, cls):
        assert issubclass(cls, ListingError)
        assert not issubclass(cls, CacheError)
