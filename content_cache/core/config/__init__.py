"""
Configuration Module

Centralized, type-safe configuration for the content caching service.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: System-wide constants, enums and cache defaults

Usage:
------
```python
from content_cache.core.config import get_settings
from content_cache.core.config.constants import CacheOutcome, Stage

settings = get_settings()
ttl = settings.cache.CACHE_DEFAULT_TTL
```

Environment Variables:
---------------------
```bash
REDIS_HOST=localhost
REDIS_PORT=6379
CACHE_DEFAULT_TTL=300
CACHE_CHECK_PERIOD=60
CACHE_SHARED_TIER_ENABLED=false
LOG_LEVEL=INFO
```
"""

from content_cache.core.config.settings import Settings, get_settings, reload_settings

__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]
