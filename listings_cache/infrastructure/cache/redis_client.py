"""
Redis Client and Client Accessor

Architecture:
    RedisClientProvider (Client accessor, one per process)
        └── RedisClient (Public command surface)
                └── CommandExecutor (Command execution with error handling)

The provider owns configuration and memoization; the client exposes only the
commands the cache service consumes (GET, SETEX, DEL, KEYS, INCR, DECR, PING).

Author: System Architect
Date: 2025-12-09
"""

from typing import Any

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from listings_cache.core.config.settings import get_settings
from listings_cache.core.exceptions import (
    CacheConfigurationError,
    CacheConnectionError,
    CacheError,
    CacheKeyError,
)
from listings_cache.core.logging.logger import get_logger

logger = get_logger(__name__)


def _translate(command: str, error: RedisError, details: dict[str, Any]) -> CacheError:
    """Map a redis-py error onto the cache exception hierarchy."""
    error_cls = (
        CacheConnectionError
        if isinstance(error, (RedisConnectionError, RedisTimeoutError))
        else CacheKeyError
    )
    return error_cls.from_exception(error, f"Redis {command} failed: {error}", **details)


# =============================================================================
# LAYER 1: COMMAND EXECUTOR
# Executes Redis commands with error handling and logging
# =============================================================================


class CommandExecutor:
    """
    Executes Redis commands with consistent error handling.

    Error Handling Strategy:
    - Catch RedisError exceptions
    - Log error with context (stage, key, etc.)
    - Raise CacheConnectionError for transport failures, CacheKeyError otherwise
    - Chain the original exception for debugging
    """

    def __init__(self, redis_client: redis.Redis):
        self._redis = redis_client

    async def get(self, key: str) -> str | None:
        """
        Get value from Redis.

        STAGE-REDIS.GET: Redis GET operation
        """
        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error("Redis GET failed", stage="REDIS.GET", key=key, error=str(e))
            raise _translate("GET", e, {"key": key}) from e

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        """
        Set value with expiry in Redis.

        STAGE-REDIS.SETEX: Redis SETEX operation
        """
        try:
            return bool(await self._redis.setex(key, ttl, value))
        except RedisError as e:
            logger.error("Redis SETEX failed", stage="REDIS.SETEX", key=key, ttl=ttl, error=str(e))
            raise _translate("SETEX", e, {"key": key, "ttl": ttl}) from e

    async def delete(self, *keys: str) -> int:
        """
        Delete keys from Redis.

        STAGE-REDIS.DEL: Redis DELETE operation
        """
        try:
            return await self._redis.delete(*keys)
        except RedisError as e:
            logger.error("Redis DELETE failed", stage="REDIS.DEL", keys=keys, error=str(e))
            raise _translate("DELETE", e, {"keys": list(keys)}) from e

    async def keys(self, pattern: str) -> list[str]:
        """
        List keys matching a pattern.

        STAGE-REDIS.KEYS: Redis KEYS operation (O(keyspace) on the server)
        """
        try:
            return list(await self._redis.keys(pattern))
        except RedisError as e:
            logger.error("Redis KEYS failed", stage="REDIS.KEYS", pattern=pattern, error=str(e))
            raise _translate("KEYS", e, {"pattern": pattern}) from e

    async def incr(self, key: str) -> int:
        try:
            return await self._redis.incr(key)
        except RedisError as e:
            logger.error("Redis INCR failed", stage="REDIS.INCR", key=key, error=str(e))
            raise _translate("INCR", e, {"key": key}) from e

    async def decr(self, key: str) -> int:
        try:
            return await self._redis.decr(key)
        except RedisError as e:
            logger.error("Redis DECR failed", stage="REDIS.DECR", key=key, error=str(e))
            raise _translate("DECR", e, {"key": key}) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.warning("Redis PING failed", stage="REDIS.PING", error=str(e))
            raise _translate("PING", e, {}) from e


# =============================================================================
# LAYER 2: PUBLIC API
# =============================================================================


class RedisClient:
    """
    Async Redis command surface used by the listings cache.

    Implements the KeyValueBackend protocol. Constructing the client does not
    open a socket; redis-py connects lazily on the first command.

    Usage:
        client = RedisClient(redis.Redis.from_url(url, password=token))
        await client.setex("listings:detail:abc", 3600, payload)
        value = await client.get("listings:detail:abc")
        await client.close()
    """

    def __init__(self, redis_client: redis.Redis):
        self._redis = redis_client
        self._executor = CommandExecutor(redis_client)

    async def get(self, key: str) -> str | None:
        """Get value from Redis."""
        return await self._executor.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        """Set value with TTL in Redis."""
        return await self._executor.setex(key, ttl, value)

    async def delete(self, *keys: str) -> int:
        """Delete keys from Redis."""
        return await self._executor.delete(*keys)

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob pattern."""
        return await self._executor.keys(pattern)

    async def incr(self, key: str) -> int:
        """Increment a counter."""
        return await self._executor.incr(key)

    async def decr(self, key: str) -> int:
        """Decrement a counter."""
        return await self._executor.decr(key)

    async def ping(self) -> bool:
        """Check Redis connection health."""
        return await self._executor.ping()

    async def close(self) -> None:
        """
        Release the connection pool.

        STAGE-REDIS.3: Connection cleanup
        """
        await self._redis.aclose()
        logger.info("Redis disconnected", stage="REDIS.3")


# =============================================================================
# LAYER 3: CLIENT ACCESSOR
# =============================================================================


class RedisClientProvider:
    """
    Resolves and memoizes the process-wide Redis client.

    STAGE-REDIS.1: Client resolution

    - ``is_available()`` reports whether both endpoint URL and token are set.
      It performs no I/O.
    - ``get_client()`` builds the client on first use from the configuration
      read at that moment and returns the same instance afterwards. With no
      configuration it returns None; the cache layer is then disabled.
    - A malformed URL raises CacheConfigurationError. Misconfiguration is an
      operator error and is not degraded to "cache disabled".

    Created once in the application lifespan and stored on ``app.state``.
    """

    def __init__(self, settings=None, client_factory=None):
        """
        Args:
            settings: Application settings (defaults to the global settings)
            client_factory: Callable building a redis.asyncio.Redis from a URL
                and keyword options (defaults to ``redis.Redis.from_url``)
        """
        self._settings = settings or get_settings()
        self._client_factory = client_factory or redis.Redis.from_url
        self._client: RedisClient | None = None
        self._warned_unconfigured = False

    def is_available(self) -> bool:
        redis_settings = self._settings.redis
        return bool(redis_settings.REDIS_URL) and bool(redis_settings.REDIS_TOKEN)

    def get_client(self) -> RedisClient | None:
        """
        Get the memoized client, constructing it on first call.

        Returns:
            RedisClient or None when the backend is not configured

        Raises:
            CacheConfigurationError: If the client cannot be constructed
        """
        if self._client is not None:
            return self._client

        redis_settings = self._settings.redis
        if not (redis_settings.REDIS_URL and redis_settings.REDIS_TOKEN):
            if not self._warned_unconfigured:
                logger.warning(
                    "Redis configuration missing, caching disabled",
                    stage="REDIS.1",
                    url_configured=bool(redis_settings.REDIS_URL),
                    token_configured=bool(redis_settings.REDIS_TOKEN),
                )
                self._warned_unconfigured = True
            return None

        try:
            raw_client = self._client_factory(
                redis_settings.REDIS_URL,
                password=redis_settings.REDIS_TOKEN,
                decode_responses=True,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
            )
        except ValueError as e:
            logger.error("Failed to construct Redis client", stage="REDIS.1", error=str(e))
            raise CacheConfigurationError.from_exception(
                e, f"Invalid cache backend configuration: {e}", setting="REDIS_URL"
            ).with_suggestion(
                "REDIS_URL must use the redis://, rediss:// or unix:// scheme"
            ) from e

        self._client = RedisClient(raw_client)
        logger.info("Redis client initialized", stage="REDIS.1")
        return self._client

    async def close(self) -> None:
        """Close the memoized client, if one was ever built."""
        if self._client is not None:
            await self._client.close()
            self._client = None
