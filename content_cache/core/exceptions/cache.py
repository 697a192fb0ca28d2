"""
Cache-Related Exceptions

Raised by the cache layer itself. Transport failures of the shared cache are
never raised to callers; CacheConnectionError only travels inside
SharedCacheClient before being logged and mapped to "absent".

Author: System Architect
Date: 2026-10-02
"""

from content_cache.core.exceptions.base import ContentCacheError


class CacheError(ContentCacheError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to the shared cache (Redis).

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheSerializationError(CacheError):
    """
    Raised when a cached payload cannot be decoded or a value cannot be encoded.

    The read-through middleware lets this propagate so a malformed entry fails
    the request instead of being served.
    """
    pass
