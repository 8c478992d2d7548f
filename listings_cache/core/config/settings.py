#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
listings cache service. All configuration is centralized here to ensure
consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- IDE autocomplete for all settings
- Easy testing with override mechanisms

Author: System Architect
Date: 2025-12-05
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from listings_cache.core.config.constants import (
    DEFAULT_PAGE_SIZE,
    LISTING_DETAIL_TTL,
    LISTINGS_PAGE_TTL,
    LISTINGS_SEARCH_TTL,
    MAX_PAGE_SIZE,
)


class RedisSettings(BaseSettings):
    """
    Cache backend connection configuration.

    STAGE-0.1: Redis connection configuration

    The backend is reached through an endpoint URL and an access token. When
    either one is missing or empty the cache layer is disabled entirely; this
    is treated as "backend absent", not as an error.
    """

    REDIS_URL: str | None = Field(default=None, description="Cache backend endpoint URL")
    REDIS_TOKEN: str | None = Field(default=None, description="Cache backend access token")

    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    TTL configuration per cache entry class.

    STAGE-2: Cache TTL configuration

    Changing a TTL is a configuration change, not a code path.
    """

    CACHE_TTL_LISTINGS_PAGE: int = Field(default=LISTINGS_PAGE_TTL, description="Listings page TTL (15 min)")
    CACHE_TTL_LISTING_DETAIL: int = Field(default=LISTING_DETAIL_TTL, description="Listing detail TTL (1 hour)")
    CACHE_TTL_LISTINGS_SEARCH: int = Field(default=LISTINGS_SEARCH_TTL, description="Search result TTL (15 min)")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ListingsSettings(BaseSettings):
    """Listings query configuration."""

    LISTINGS_DEFAULT_PAGE_SIZE: int = Field(default=DEFAULT_PAGE_SIZE, description="Default search page size")
    LISTINGS_MAX_PAGE_SIZE: int = Field(default=MAX_PAGE_SIZE, description="Maximum search page size")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """
    General application settings.

    STAGE-0: Application initialization
    """

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Listings Cache Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api", description="Prefix for all API routes")

    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from listings_cache.core.config.settings import get_settings

        settings = get_settings()
        redis_url = settings.redis.REDIS_URL
        detail_ttl = settings.cache.CACHE_TTL_LISTING_DETAIL

    The backend credentials also accept the names used by hosted Redis
    providers (UPSTASH_REDIS_REST_URL / UPSTASH_REDIS_REST_TOKEN).
    """

    # Redis settings
    REDIS_URL: str | None = Field(
        default=None,
        description="Cache backend endpoint URL",
        validation_alias=AliasChoices("REDIS_URL", "UPSTASH_REDIS_URL", "UPSTASH_REDIS_REST_URL"),
    )
    REDIS_TOKEN: str | None = Field(
        default=None,
        description="Cache backend access token",
        validation_alias=AliasChoices("REDIS_TOKEN", "UPSTASH_REDIS_TOKEN", "UPSTASH_REDIS_REST_TOKEN"),
    )
    REDIS_SOCKET_TIMEOUT: int = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: int = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Cache settings
    CACHE_TTL_LISTINGS_PAGE: int = Field(default=LISTINGS_PAGE_TTL, description="Listings page TTL (15 min)")
    CACHE_TTL_LISTING_DETAIL: int = Field(default=LISTING_DETAIL_TTL, description="Listing detail TTL (1 hour)")
    CACHE_TTL_LISTINGS_SEARCH: int = Field(default=LISTINGS_SEARCH_TTL, description="Search result TTL (15 min)")

    # Listings settings
    LISTINGS_DEFAULT_PAGE_SIZE: int = Field(default=DEFAULT_PAGE_SIZE, description="Default search page size")
    LISTINGS_MAX_PAGE_SIZE: int = Field(default=MAX_PAGE_SIZE, description="Maximum search page size")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Listings Cache Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api", description="Prefix for all API routes")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator("CACHE_TTL_LISTINGS_PAGE", "CACHE_TTL_LISTING_DETAIL", "CACHE_TTL_LISTINGS_SEARCH")
    @classmethod
    def validate_ttl(cls, v):
        """TTLs must be positive; SETEX rejects zero and negative lifetimes."""
        if v <= 0:
            raise ValueError("cache TTLs must be positive")
        return v

    # Nested configuration objects
    @property
    def redis(self) -> 'RedisSettings':
        """Get Redis settings."""
        return RedisSettings(
            REDIS_URL=self.REDIS_URL,
            REDIS_TOKEN=self.REDIS_TOKEN,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def cache(self) -> 'CacheSettings':
        """Get cache settings."""
        return CacheSettings(
            CACHE_TTL_LISTINGS_PAGE=self.CACHE_TTL_LISTINGS_PAGE,
            CACHE_TTL_LISTING_DETAIL=self.CACHE_TTL_LISTING_DETAIL,
            CACHE_TTL_LISTINGS_SEARCH=self.CACHE_TTL_LISTINGS_SEARCH,
        )

    @property
    def listings(self) -> 'ListingsSettings':
        """Get listings settings."""
        return ListingsSettings(
            LISTINGS_DEFAULT_PAGE_SIZE=self.LISTINGS_DEFAULT_PAGE_SIZE,
            LISTINGS_MAX_PAGE_SIZE=self.LISTINGS_MAX_PAGE_SIZE,
        )

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    @property
    def app(self) -> 'ApplicationSettings':
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            DEBUG=self.DEBUG,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
            API_HOST=self.API_HOST,
            API_PORT=self.API_PORT,
            API_BASE_PATH=self.API_BASE_PATH,
            CORS_ORIGINS=self.CORS_ORIGINS,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
