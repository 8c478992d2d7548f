"""
Cache Test Factory

Creates cache backends, client providers and cache services with various
configurations for testing.
"""

from unittest.mock import AsyncMock

from listings_cache.core.interfaces.cache import InMemoryKeyValueBackend, KeyValueBackend


class FakeClientProvider:
    """
    Stand-in for RedisClientProvider that hands out a prepared backend.

    ``FakeClientProvider(None)`` behaves like a process with no cache
    configuration.
    """

    def __init__(self, backend: KeyValueBackend | None = None):
        self.backend = backend
        self.closed = False
        self.get_client_calls = 0

    def is_available(self) -> bool:
        return self.backend is not None

    def get_client(self):
        self.get_client_calls += 1
        return self.backend

    async def close(self) -> None:
        self.closed = True


class RecordingBackend(InMemoryKeyValueBackend):
    """In-memory backend that records every command it receives."""

    def __init__(self, clock=None):
        if clock is None:
            super().__init__()
        else:
            super().__init__(clock=clock)
        self.commands: list[tuple] = []

    async def get(self, key):
        self.commands.append(("GET", key))
        return await super().get(key)

    async def setex(self, key, ttl, value):
        self.commands.append(("SETEX", key, ttl))
        return await super().setex(key, ttl, value)

    async def delete(self, *keys):
        self.commands.append(("DEL", *keys))
        return await super().delete(*keys)

    async def keys(self, pattern):
        self.commands.append(("KEYS", pattern))
        return await super().keys(pattern)

    async def incr(self, key):
        self.commands.append(("INCR", key))
        return await super().incr(key)

    async def decr(self, key):
        self.commands.append(("DECR", key))
        return await super().decr(key)

    def command_names(self) -> list[str]:
        return [command[0] for command in self.commands]


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CacheTestFactory:
    """Factory for creating cache test objects."""

    @staticmethod
    def backend_with_counters(hits: int | None, misses: int | None) -> RecordingBackend:
        """Backend with the hit/miss counters preset (None leaves a counter absent)."""
        backend = RecordingBackend()
        if hits is not None:
            backend._store["cache:metrics:hits"] = str(hits)
        if misses is not None:
            backend._store["cache:metrics:misses"] = str(misses)
        return backend

    @staticmethod
    def failing_backend(error: Exception | None = None) -> AsyncMock:
        """Create a backend whose every command fails."""
        from listings_cache.core.exceptions import CacheConnectionError

        if error is None:
            error = CacheConnectionError("Redis connection failed")

        backend = AsyncMock(spec=InMemoryKeyValueBackend)
        for command in ("get", "setex", "delete", "keys", "incr", "decr", "ping"):
            getattr(backend, command).side_effect = error
        return backend

    @staticmethod
    def cache_service(backend: KeyValueBackend | None = None, ttl_policy=None):
        """Create a ListingsCacheService over the given backend (None = disabled)."""
        from listings_cache.infrastructure.cache.cache_service import ListingsCacheService

        return ListingsCacheService(FakeClientProvider(backend), ttl_policy)
