"""
Exception Module

Structured exception hierarchy for the content caching service.

Module Structure:
-----------------
- **base.py**: ContentCacheError base class + ConfigurationError
- **cache.py**: Cache-related exceptions (Redis, serialization)
- **store.py**: Primary store data-access exceptions

Usage:
------
```python
from content_cache.core.exceptions import StoreError, NotFoundError
```
"""

from content_cache.core.exceptions.base import ConfigurationError, ContentCacheError
from content_cache.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
)
from content_cache.core.exceptions.store import NotFoundError, StoreError

__all__ = [
    # Base
    "ContentCacheError",
    "ConfigurationError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    # Store
    "StoreError",
    "NotFoundError",
]
