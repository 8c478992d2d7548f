"""
Root of the listings cache exception hierarchy.

Cache errors (cache.py) and listing errors (listing.py) both derive from
ListingsCacheBaseError, so the application can map every domain failure to a
JSON body with one handler.
"""

from typing import Any


class ListingsCacheBaseError(Exception):
    """
    Base exception for the listings cache service.

    Attributes:
        message: Human readable message, also used as ``str(error)``
        request_id: Request the error belongs to; filled in by the
            exception handler when the raiser did not know it
        details: Structured context (cache key, listing id, ...) returned
            to clients under ``details``

    Example:
        raise ListingNotFoundError(
            "Listing abc not found",
            details={"listing_id": "abc"},
        )
    """

    def __init__(
        self, message: str, request_id: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.request_id = request_id
        self.details = dict(details or {})
        super().__init__(self.message)

    @classmethod
    def from_exception(
        cls, exc: Exception, message: str | None = None, **details
    ) -> "ListingsCacheBaseError":
        """
        Wrap a third-party exception, recording its type and text in details.

        Used at the Redis boundary, where redis-py errors become cache errors:

            except RedisError as e:
                raise CacheKeyError.from_exception(e, "Redis GET failed", key=key) from e

        Chaining with ``from`` is left to the caller.
        """
        return cls(
            message or str(exc),
            details={
                "original_error": type(exc).__name__,
                "original_message": str(exc),
                **details,
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Error body shape returned by the API exception handlers."""
        return {
            "error_type": type(self).__name__,
            "message": self.message,
            "request_id": self.request_id,
            "details": self.details,
        }

    def with_suggestion(self, suggestion: str) -> "ListingsCacheBaseError":
        """Attach an operator hint (e.g. which setting to fix) and return self."""
        self.details["suggestion"] = suggestion
        return self

    def __repr__(self) -> str:
        parts = [f"message='{self.message}'"]
        if self.request_id:
            parts.append(f"request_id='{self.request_id}'")
        if self.details:
            parts.append(f"details={self.details}")
        return f"{type(self).__name__}({', '.join(parts)})"


class ConfigurationError(ListingsCacheBaseError):
    """Raised when settings are invalid or missing."""
