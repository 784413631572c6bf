"""
Cache infrastructure module.
"""
from .base import CacheStore, InMemoryCacheStore, derive_cache_key
from .file_store import FileCacheStore
from .redis import RedisCacheStore

__all__ = [
    "CacheStore",
    "FileCacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "derive_cache_key",
]
