"""
Unit Tests for InMemoryListingStore and the listing models
"""

import pytest
from pydantic import ValidationError

from listings_cache.core.exceptions import ListingNotFoundError
from listings_cache.listings.models.listing import (
    ListingCreate,
    ListingSearchParams,
    ListingSearchResult,
    ListingStatus,
    ListingUpdate,
)
from tests.test_fixtures.listing_factory import ListingFactory


def _ids(result):
    return [listing.id for listing in result.listings]


@pytest.mark.unit
class TestSearchFiltering:
    """Test filters applied by the store."""

    @pytest.mark.asyncio
    async def test_only_active_listings(self, listing_store):
        result = await listing_store.search(ListingSearchParams())

        assert result.total == 3
        assert "nairobi-rented" not in _ids(result)
        assert "nairobi-inactive" not in _ids(result)

    @pytest.mark.asyncio
    async def test_price_bounds_inclusive(self, listing_store):
        result = await listing_store.search(ListingSearchParams(min_price=500, max_price=1200))

        assert sorted(_ids(result)) == ["accra-loft", "lagos-cheap"]

    @pytest.mark.asyncio
    async def test_bedrooms_minimum(self, listing_store):
        result = await listing_store.search(ListingSearchParams(bedrooms=2))

        assert sorted(_ids(result)) == ["accra-loft", "lagos-family"]

    @pytest.mark.asyncio
    async def test_location_case_insensitive(self, listing_store):
        result = await listing_store.search(ListingSearchParams(location="lagos"))

        assert sorted(_ids(result)) == ["lagos-cheap", "lagos-family"]

    @pytest.mark.asyncio
    async def test_all_amenities_required(self, listing_store):
        result = await listing_store.search(ListingSearchParams(amenities=["WiFi", "parking"]))

        assert _ids(result) == ["lagos-family"]

    @pytest.mark.asyncio
    async def test_text_search_covers_description(self, listing_store):
        result = await listing_store.search(ListingSearchParams(search="open plan"))

        assert _ids(result) == ["accra-loft"]

    @pytest.mark.asyncio
    async def test_radius_ignored(self, listing_store):
        result = await listing_store.search(ListingSearchParams(location="Lagos", radius="5km"))

        assert result.total == 2


@pytest.mark.unit
class TestSearchOrdering:
    """Test sort and pagination."""

    @pytest.mark.asyncio
    async def test_default_newest_first(self, listing_store):
        result = await listing_store.search(ListingSearchParams())

        assert _ids(result) == ["accra-loft", "lagos-family", "lagos-cheap"]

    @pytest.mark.asyncio
    async def test_price_ascending(self, listing_store):
        result = await listing_store.search(ListingSearchParams(sort_by="price", order="asc"))

        assert _ids(result) == ["lagos-cheap", "accra-loft", "lagos-family"]

    @pytest.mark.asyncio
    async def test_recommended_by_favorites(self, listing_store):
        result = await listing_store.search(ListingSearchParams(sort_by="recommended"))

        assert _ids(result) == ["lagos-family", "accra-loft", "lagos-cheap"]

    @pytest.mark.asyncio
    async def test_pagination(self, listing_store):
        result = await listing_store.search(ListingSearchParams(page=2, limit=2, sort_by="price", order="asc"))

        assert _ids(result) == ["lagos-family"]
        assert (result.total, result.page, result.limit, result.total_pages) == (3, 2, 2, 2)

    @pytest.mark.asyncio
    async def test_page_past_end_is_empty(self, listing_store):
        result = await listing_store.search(ListingSearchParams(page=9))

        assert result.listings == []
        assert result.total == 3


@pytest.mark.unit
class TestStoreMutations:
    """Test create, update, status change and delete."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_active_status(self, listing_store):
        listing = await listing_store.create(ListingFactory.listing_create(title="Sea view"))

        assert listing.id
        assert listing.status is ListingStatus.ACTIVE
        assert await listing_store.get(listing.id) == listing
        assert len(listing_store) == 6

    @pytest.mark.asyncio
    async def test_update_applies_only_set_fields(self, listing_store):
        before = await listing_store.get("accra-loft")

        after = await listing_store.update("accra-loft", ListingUpdate(rent_xlm=1300.0))

        assert after.rent_xlm == 1300.0
        assert after.title == before.title
        assert after.updated_at > before.updated_at

    @pytest.mark.asyncio
    async def test_update_clears_description(self, listing_store):
        after = await listing_store.update("accra-loft", ListingUpdate(description=None))

        assert after.description is None
        assert after.address == "3 Oxford Street, Accra"

    @pytest.mark.asyncio
    async def test_update_rebuild_is_validated(self, listing_store):
        unchecked = ListingUpdate.model_construct(address=None)

        with pytest.raises(ValidationError):
            await listing_store.update("accra-loft", unchecked)

        assert (await listing_store.get("accra-loft")).address == "3 Oxford Street, Accra"

    @pytest.mark.asyncio
    async def test_set_status(self, listing_store):
        listing = await listing_store.set_status("lagos-cheap", ListingStatus.RENTED)

        assert listing.status is ListingStatus.RENTED

    @pytest.mark.asyncio
    async def test_delete(self, listing_store):
        await listing_store.delete("lagos-cheap")

        assert await listing_store.get("lagos-cheap") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation", ["update", "set_status", "delete"])
    async def test_unknown_id_raises(self, listing_store, operation):
        args = {
            "update": (ListingUpdate(title="x"),),
            "set_status": (ListingStatus.ACTIVE,),
            "delete": (),
        }[operation]

        with pytest.raises(ListingNotFoundError):
            await getattr(listing_store, operation)("ghost", *args)


@pytest.mark.unit
class TestListingModels:
    """Test payload validation and the search parameter wire format."""

    def test_create_splits_comma_amenities(self):
        data = ListingCreate(**ListingFactory.create_payload(amenities="wifi, parking"))

        assert data.amenities == ["wifi", "parking"]

    @pytest.mark.parametrize("field, value", [("rent_xlm", 0), ("title", ""), ("bedrooms", -1)])
    def test_create_rejects_invalid(self, field, value):
        with pytest.raises(ValidationError):
            ListingCreate(**ListingFactory.create_payload(**{field: value}))

    def test_search_params_accept_camel_case(self):
        params = ListingSearchParams(minPrice=100, sortBy="price")

        assert params.min_price == 100
        assert params.sort_by == "price"

    def test_search_params_limit_not_capped_by_model(self):
        # The configured maximum is enforced by the route.
        assert ListingSearchParams(limit=150).limit == 150

    def test_search_params_limit_positive(self):
        with pytest.raises(ValidationError):
            ListingSearchParams(limit=0)

    @pytest.mark.parametrize("field", ["title", "address", "rent_xlm", "bedrooms", "bathrooms", "amenities"])
    def test_update_rejects_null_for_required_field(self, field):
        with pytest.raises(ValidationError, match=field):
            ListingUpdate(**{field: None})

    def test_update_allows_clearing_description(self):
        data = ListingUpdate(description=None)

        assert data.model_dump(exclude_unset=True) == {"description": None}

    def test_blank_filters_dropped(self):
        assert ListingSearchParams(location="  ", search="").cache_params() == ListingSearchParams().cache_params()

    def test_cache_params_use_wire_names(self):
        params = ListingSearchParams(min_price=100, amenities=["wifi", "garden"])

        assert params.cache_params() == {
            "minPrice": 100.0,
            "amenities": ["garden", "wifi"],
            "sortBy": "created_at",
            "order": "desc",
            "page": 1,
            "limit": 20,
        }

    def test_result_payload_uses_total_pages_alias(self):
        result = ListingSearchResult.paginate([], total=41, page=1, limit=20)

        assert result.to_payload() == {
            "listings": [],
            "total": 41,
            "page": 1,
            "limit": 20,
            "totalPages": 3,
        }
