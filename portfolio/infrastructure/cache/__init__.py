"""Cache: Redis and in-memory backends, key builders, and the cache-aside wrapper.

CacheService uses portfolio.core.config; key format is in keys.py (DRY).
"""

from portfolio.infrastructure.cache.cache_aside import CacheAside, principal_id_of
from portfolio.infrastructure.cache.keys import list_key, resource_prefix, signature_digest
from portfolio.infrastructure.cache.memory_cache import MemoryCache
from portfolio.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheAside",
    "CacheService",
    "MemoryCache",
    "list_key",
    "principal_id_of",
    "resource_prefix",
    "signature_digest",
]
