"""
Configuration Module

This module provides centralized, type-safe configuration management
for the listings cache service.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Key namespaces, TTL defaults, enums and HTTP header names

Usage:
------
```python
from listings_cache.core.config import get_settings
from listings_cache.core.config.constants import EntryClass

settings = get_settings()
redis_url = settings.redis.REDIS_URL
page_ttl = settings.cache.CACHE_TTL_LISTINGS_PAGE
```
"""

from listings_cache.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]
