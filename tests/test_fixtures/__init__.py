"""
Test Fixtures Package

Shared test utilities and helpers for consistent testing across all modules.
"""

from .cache_factory import CacheTestFactory, FakeClock
from .content_factory import ContentTestFactory

__all__ = ["CacheTestFactory", "ContentTestFactory", "FakeClock"]
