"""
Primary Store Exceptions

Data-access failures raised by ContentStore implementations. They pass
through the cache layer unmodified and are turned into error responses by the
application's exception handlers.
"""

from content_cache.core.exceptions.base import ContentCacheError


class StoreError(ContentCacheError):
    """Generic data-access error (connectivity or query problem)."""
    pass


class NotFoundError(StoreError):
    """Raised when a point lookup finds no entity."""
    pass
