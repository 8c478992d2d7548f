"""
Listing domain models.

Wire format uses camelCase for search parameters and the result envelope
(``minPrice``, ``totalPages``); listing rows keep the store's snake_case
column names.
"""

import math
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from listings_cache.core.config.constants import DEFAULT_PAGE_SIZE


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ListingStatus(str, Enum):
    """
    Availability of a listing.

    ACTIVE: visible in search results
    INACTIVE: hidden by the landlord
    RENTED: no longer available
    """

    ACTIVE = "active"
    INACTIVE = "inactive"
    RENTED = "rented"


SortField = Literal["price", "created_at", "bedrooms", "bathrooms", "views", "favorites", "recommended"]
SortOrder = Literal["asc", "desc"]


def _split_amenities(v):
    """Accept ``"wifi,parking"`` as well as ``["wifi", "parking"]``."""
    if isinstance(v, str):
        v = [v]
    if isinstance(v, list):
        items = []
        for entry in v:
            if isinstance(entry, str):
                items.extend(part.strip() for part in entry.split(",") if part.strip())
            else:
                items.append(entry)
        return items
    return v


class Listing(BaseModel):
    """A rental listing as stored in the primary store."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    landlord_id: str
    title: str
    description: str | None = None
    address: str
    rent_xlm: float
    bedrooms: int = 0
    bathrooms: int = 0
    amenities: list[str] = Field(default_factory=list)
    status: ListingStatus = ListingStatus.ACTIVE
    views: int = 0
    favorites: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class ListingCreate(BaseModel):
    """Payload for creating a listing."""

    landlord_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    address: str = Field(..., min_length=1)
    rent_xlm: float = Field(..., gt=0, description="Monthly rent in XLM")
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    amenities: list[str] = Field(default_factory=list)

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, v):
        return _split_amenities(v)


class ListingUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    address: str | None = Field(default=None, min_length=1)
    rent_xlm: float | None = Field(default=None, gt=0)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    amenities: list[str] | None = None

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, v):
        return _split_amenities(v)

    @model_validator(mode="after")
    def reject_null_required(self) -> "ListingUpdate":
        # Only description may be cleared; the rest are required on Listing.
        nulled = sorted(
            name
            for name in self.model_fields_set
            if name != "description" and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self


class ListingStatusUpdate(BaseModel):
    status: ListingStatus


class ListingSearchParams(BaseModel):
    """
    Search filters, sort and pagination.

    ``radius`` is accepted and participates in the cache hash, but the
    in-memory store has no geocoding and ignores it.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    location: str | None = None
    radius: str | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    amenities: list[str] | None = None
    search: str | None = None
    sort_by: SortField = "created_at"
    order: SortOrder = "desc"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)

    @field_validator("amenities", mode="before")
    @classmethod
    def split_amenities(cls, v):
        v = _split_amenities(v)
        return v or None

    @field_validator("location", "search", "radius", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def cache_params(self) -> dict[str, Any]:
        """Normalized parameters fed to the search hash (unset filters omitted)."""
        params = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if "amenities" in params:
            params["amenities"] = sorted(params["amenities"])
        return params


class ListingSearchResult(BaseModel):
    """Paginated search envelope: ``{listings, total, page, limit, totalPages}``."""

    model_config = ConfigDict(populate_by_name=True)

    listings: list[Listing]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def paginate(cls, listings: list[Listing], total: int, page: int, limit: int) -> "ListingSearchResult":
        return cls(
            listings=listings,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
