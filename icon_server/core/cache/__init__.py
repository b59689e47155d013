from .keys import icon_cache_key
from .memory_cache import MemoryCache
from .rwlock import ReadWriteLock
from .types import CacheEntry, CacheKey, Clock

__all__ = [
    "CacheEntry",
    "CacheKey",
    "Clock",
    "MemoryCache",
    "ReadWriteLock",
    "icon_cache_key",
]
