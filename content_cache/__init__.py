"""
Content Cache Service

Response caching for a content-serving backend: an in-process TTL cache,
deterministic cache keys, cache-aside orchestration with single-flight,
a best-effort Redis tier and a resident random selection index.
"""

__version__ = "1.0.0"
