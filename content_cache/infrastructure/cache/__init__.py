"""
Cache Module

Two-tier caching: in-process TTLCache (L1) and best-effort Redis (L2),
combined by CacheAsideOrchestrator.
"""

from .cache_aside import CacheAsideOrchestrator
from .key_builder import build_cache_key
from .shared_cache_client import SharedCacheClient, SharedCacheResult
from .stats import CacheStatsCollector
from .ttl_cache import CacheEntry, TTLCache

__all__ = [
    "CacheAsideOrchestrator",
    "CacheEntry",
    "CacheStatsCollector",
    "SharedCacheClient",
    "SharedCacheResult",
    "TTLCache",
    "build_cache_key",
]
