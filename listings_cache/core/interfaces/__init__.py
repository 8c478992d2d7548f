"""
Core Interfaces Module

Abstract interfaces for core components, enabling dependency injection and
testability.

Components:
-----------
- **cache.py**: KeyValueBackend protocol for the cache command surface

Usage:
------
```python
from listings_cache.core.interfaces import KeyValueBackend

async def warm(backend: KeyValueBackend) -> None:
    await backend.setex("listings:detail:abc", 3600, "{}")
```

Author: System Architect
Date: 2025-12-08
"""

from listings_cache.core.interfaces.cache import InMemoryKeyValueBackend, KeyValueBackend

__all__ = [
    "KeyValueBackend",
    "InMemoryKeyValueBackend",
]
