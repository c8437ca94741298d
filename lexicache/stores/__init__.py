"""
Cache stores - the read side of locales and translations
"""
from lexicache.core.config import Settings
from lexicache.stores.base import CacheStore
from lexicache.stores.memory_store import MemoryStore
from lexicache.stores.redis_store import RedisStore


def build_store(config: Settings) -> CacheStore:
    """Select the cache backend named by CACHE_BACKEND."""
    if config.CACHE_BACKEND == "redis":
        return RedisStore(config.REDIS_URL, prefix=config.CACHE_PREFIX)
    return MemoryStore()


__all__ = [
    "CacheStore",
    "MemoryStore",
    "RedisStore",
    "build_store",
]
