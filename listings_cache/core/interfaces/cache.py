"""
Key-Value Backend Protocol

This module defines the command surface the listings cache consumes from its
backend, plus an in-memory implementation for development and tests.

Architectural Decision: Protocol-based abstraction
- The cache service depends on seven commands, not on a Redis client class
- Facilitates testing with an in-memory backend instead of a live server
- Type-safe interface with runtime checking

Author: System Architect
Date: 2025-12-08
"""

import fnmatch
import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """
    Protocol defining the key-value commands used by the cache layer.

    Implementations:
    - RedisClient: Production Redis-backed backend
    - InMemoryKeyValueBackend: Testing/development backend

    Every command may raise CacheConnectionError or CacheKeyError; the
    cache service is responsible for absorbing them.
    """

    async def get(self, key: str) -> str | None:
        """
        Get value from the backend.

        Returns:
            Optional[str]: Value or None if not found
        """
        ...

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        """
        Store value under key with a time-to-live, replacing any prior value.

        Args:
            key: Cache key
            ttl: Time-to-live in seconds (must be positive)
            value: Serialized value
        """
        ...

    async def delete(self, *keys: str) -> int:
        """
        Delete keys.

        Returns:
            int: Number of keys deleted
        """
        ...

    async def keys(self, pattern: str) -> list[str]:
        """
        List keys matching a glob-style pattern.

        Note: O(keyspace) on the backend.
        """
        ...

    async def incr(self, key: str) -> int:
        """Increment counter, creating it at 0 first if absent."""
        ...

    async def decr(self, key: str) -> int:
        """Decrement counter, creating it at 0 first if absent."""
        ...

    async def ping(self) -> bool:
        """Check if the backend is reachable."""
        ...


class InMemoryKeyValueBackend:
    """
    Simple in-memory backend implementation for testing.

    Implements the KeyValueBackend protocol without external dependencies.
    Expiry is evaluated lazily on access against a monotonic clock.

    Note: This is NOT distributed. Use only for tests and local development.
    """

    def __init__(self, clock=time.monotonic):
        self._store: dict[str, str] = {}
        self._expires_at: dict[str, float] = {}
        self._clock = clock

    def _purge(self, key: str) -> None:
        deadline = self._expires_at.get(key)
        if deadline is not None and self._clock() >= deadline:
            self._store.pop(key, None)
            self._expires_at.pop(key, None)

    def _live_keys(self) -> list[str]:
        for key in list(self._store):
            self._purge(key)
        return list(self._store)

    async def get(self, key: str) -> str | None:
        """Get value from in-memory store."""
        self._purge(key)
        return self._store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        """Set value with TTL in in-memory store."""
        if ttl <= 0:
            raise ValueError("invalid expire time in 'setex' command")
        self._store[key] = value
        self._expires_at[key] = self._clock() + ttl
        return True

    async def delete(self, *keys: str) -> int:
        """Delete keys from in-memory store."""
        count = 0
        for key in keys:
            self._purge(key)
            if key in self._store:
                del self._store[key]
                self._expires_at.pop(key, None)
                count += 1
        return count

    async def keys(self, pattern: str) -> list[str]:
        """Match keys with glob semantics."""
        return [key for key in self._live_keys() if fnmatch.fnmatchcase(key, pattern)]

    async def incr(self, key: str) -> int:
        """Increment counter."""
        return self._add(key, 1)

    async def decr(self, key: str) -> int:
        """Decrement counter."""
        return self._add(key, -1)

    def _add(self, key: str, amount: int) -> int:
        self._purge(key)
        value = int(self._store.get(key, "0")) + amount
        self._store[key] = str(value)
        return value

    async def ping(self) -> bool:
        return True

    async def ttl(self, key: str) -> int:
        """Remaining TTL in whole seconds, -1 if none, -2 if the key doesn't exist."""
        self._purge(key)
        if key not in self._store:
            return -2
        deadline = self._expires_at.get(key)
        if deadline is None:
            return -1
        return int(round(deadline - self._clock()))

    async def close(self) -> None:
        self._store.clear()
        self._expires_at.clear()
