"""
FastAPI Dependency Injection Module - Educational Documentation
================================================================

WHAT LIVES HERE?
----------------
Dependency providers that hand route handlers the process-wide singletons
built in the application lifespan:

- ListingsCacheService: the read-through cache (app.state.cache_service)
- ListingService: store + cache coordination (app.state.listing_service)
- Settings: configuration

WHY app.state?
--------------
The lifespan context manager builds these objects ONCE per process and stores
them on ``app.state``. Every request receives the SAME instance through the
Request object. This is better than module globals because:
- It's explicitly tied to the app instance (each test app gets its own)
- It's initialized in the lifespan manager (proper lifecycle)
- It's accessible from any request via the Request object

FAILURE MODE:
-------------
If a route runs before the lifespan completed (e.g. a TestClient created
without entering its context manager), the dependency raises RuntimeError.
The error middleware turns that into a 500.

Example:
    @router.get("/listings/{listing_id}")
    async def get_listing(listing_id: str, service: ListingServiceDep):
        read = await service.get_detail(listing_id)
"""

from typing import Annotated

from fastapi import Depends, Request

from listings_cache.core.config.settings import Settings, get_settings
from listings_cache.infrastructure.cache.cache_service import ListingsCacheService
from listings_cache.listings.services.listing_service import ListingService


def _from_state(request: Request, name: str):
    component = getattr(request.app.state, name, None)
    if component is None:
        raise RuntimeError(
            f"{name} not initialized in app.state. "
            "This indicates the application lifespan startup didn't complete properly."
        )
    return component


def get_cache_service(request: Request) -> ListingsCacheService:
    """
    Retrieve the ListingsCacheService singleton from application state.

    Args:
        request: FastAPI Request object (automatically injected by FastAPI)

    Raises:
        RuntimeError: If the lifespan did not run
    """
    return _from_state(request, "cache_service")


def get_listing_service(request: Request) -> ListingService:
    """Retrieve the ListingService singleton from application state."""
    return _from_state(request, "listing_service")


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with, falling back to the global settings."""
    return getattr(request.app.state, "settings", None) or get_settings()


# ============================================================================
# TYPE ALIASES FOR CLEANER ROUTE SIGNATURES
# ============================================================================
# These two are equivalent:
#   def route(service: Annotated[ListingService, Depends(get_listing_service)]): ...
#   def route(service: ListingService = Depends(get_listing_service)): ...

CacheServiceDep = Annotated[ListingsCacheService, Depends(get_cache_service)]
ListingServiceDep = Annotated[ListingService, Depends(get_listing_service)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
