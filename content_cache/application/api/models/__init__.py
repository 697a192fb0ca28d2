"""
API Models Package

- admin.py: Admin endpoint response models
"""

from content_cache.application.api.models.admin import (
    CacheStats,
    CacheStatsResponse,
    IndexRebuildResponse,
    InvalidationResponse,
    MessageResponse,
)

__all__ = [
    "CacheStats",
    "CacheStatsResponse",
    "IndexRebuildResponse",
    "InvalidationResponse",
    "MessageResponse",
]
