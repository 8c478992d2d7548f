#!/usr/bin/env python3
"""
FastAPI Application Entry Point

This is the main entry point for the Listings Cache Service.
It configures the FastAPI application, middleware, and routes.

Author: System Architect
Date: 2025-12-10
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from listings_cache.application.api.middleware.error_handler import ErrorHandlingMiddleware
from listings_cache.application.api.routes.cache import router as cache_router
from listings_cache.application.api.routes.health import router as health_router
from listings_cache.application.api.routes.listings import router as listings_router
from listings_cache.core.config.constants import HEADER_REQUEST_ID
from listings_cache.core.config.settings import Settings, get_settings
from listings_cache.core.exceptions import (
    ListingNotFoundError,
    ListingsCacheBaseError,
    ListingValidationError,
)
from listings_cache.core.logging.logger import (
    clear_request_id,
    get_logger,
    get_request_id,
    set_request_id,
    setup_logging,
)
from listings_cache.infrastructure.cache.cache_service import ListingsCacheService
from listings_cache.infrastructure.cache.redis_client import RedisClientProvider
from listings_cache.infrastructure.cache.ttl_policy import TTLPolicy
from listings_cache.listings.services.listing_service import ListingService
from listings_cache.listings.store.base_store import ListingStore
from listings_cache.listings.store.memory_store import InMemoryListingStore

logger = get_logger(__name__)


# ============================================================================
# Application Factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    client_provider=None,
    listing_store: ListingStore | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration (defaults to the global settings)
        client_provider: Cache client accessor (defaults to a RedisClientProvider
            built from ``settings``)
        listing_store: Primary store (defaults to an empty in-memory store)

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifecycle (startup and shutdown).

        STAGE-0: Startup
        - Resolve the cache client once; a malformed REDIS_URL raises
          CacheConfigurationError here and aborts startup
        - Build the cache service and listing service on app.state
        """
        setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

        logger.info(
            "Starting Listings Cache Service",
            environment=settings.app.ENVIRONMENT,
            version=settings.app.APP_VERSION,
        )

        provider = client_provider or RedisClientProvider(settings)
        provider.get_client()

        cache_service = ListingsCacheService(provider, TTLPolicy.from_settings(settings))
        store = listing_store if listing_store is not None else InMemoryListingStore()

        app.state.client_provider = provider
        app.state.cache_service = cache_service
        app.state.listing_service = ListingService(
            store, cache_service, default_page_size=settings.listings.LISTINGS_DEFAULT_PAGE_SIZE
        )
        logger.info("Application startup complete", cache_enabled=cache_service.is_enabled())

        try:
            yield
        finally:
            logger.info("Shutting down application")
            await provider.close()
            logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Read-through Redis cache and HTTP surface for rental listings",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # ========================================================================
    # MIDDLEWARE REGISTRATION
    # ========================================================================
    # Executed in reverse order of registration: request id (outermost),
    # then CORS, then error handling (innermost).

    app.add_middleware(
        ErrorHandlingMiddleware,
        include_traceback=(settings.app.ENVIRONMENT == "development"),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[HEADER_REQUEST_ID, "X-Cache"],
    )

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """
        Inject request ID into all requests for correlation.
        """
        request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
        set_request_id(request_id)

        try:
            response = await call_next(request)
            response.headers[HEADER_REQUEST_ID] = request_id
            return response
        finally:
            clear_request_id()

    # ========================================================================
    # EXCEPTION HANDLERS
    # ========================================================================
    # Resolved by exception class MRO, so the most specific handler wins.

    @app.exception_handler(ListingNotFoundError)
    async def not_found_handler(request: Request, exc: ListingNotFoundError):
        return _error_response(404, exc)

    @app.exception_handler(ListingValidationError)
    async def validation_handler(request: Request, exc: ListingValidationError):
        return _error_response(422, exc)

    @app.exception_handler(ListingsCacheBaseError)
    async def base_error_handler(request: Request, exc: ListingsCacheBaseError):
        logger.error(
            f"Service exception: {exc.message}",
            error_type=type(exc).__name__,
            details=exc.details,
        )
        return _error_response(500, exc)

    # ========================================================================
    # ROUTER REGISTRATION
    # ========================================================================

    base_path = settings.app.API_BASE_PATH
    app.include_router(health_router, prefix=base_path)
    app.include_router(listings_router, prefix=base_path)
    app.include_router(cache_router, prefix=base_path)

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint with API information.
        """
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    return app


def _error_response(status_code: int, exc: ListingsCacheBaseError) -> JSONResponse:
    if exc.request_id is None:
        exc.request_id = get_request_id()
    return JSONResponse(status_code=status_code, content=exc.to_dict())


# Create application instance
app = create_app()


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "listings_cache.application.app:app",
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
