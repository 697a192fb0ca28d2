"""
Core Module

Foundational components: configuration, logging, exceptions and interfaces.
"""

from .exceptions import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    ContentCacheError,
    NotFoundError,
    StoreError,
)
from .logging import (
    clear_request_id,
    get_logger,
    get_request_id,
    log_stage,
    set_request_id,
    setup_logging,
)

__all__ = [
    # Exceptions
    "ContentCacheError",
    "ConfigurationError",
    "CacheError",
    "CacheConnectionError",
    "CacheSerializationError",
    "StoreError",
    "NotFoundError",
    # Logging
    "setup_logging",
    "get_logger",
    "log_stage",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
]
