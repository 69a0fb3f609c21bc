"""
Cache clients for record lookups.

``CacheClient`` is the capability RecordService depends on; ``RedisCacheClient``
backs it with Redis and ``InMemoryCacheClient`` with a dict for tests.
"""

from .base import CacheClient, ttl_seconds
from .memory import InMemoryCacheClient
from .redis import RedisCacheClient
from .settings import CacheSettings, get_cache_settings

__all__ = [
    "CacheClient",
    "ttl_seconds",
    "InMemoryCacheClient",
    "RedisCacheClient",
    "CacheSettings",
    "get_cache_settings",
]
