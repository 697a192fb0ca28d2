"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from content_cache.core.config.settings import Settings  # noqa: E402
from tests.test_fixtures import CacheTestFactory, ContentTestFactory, FakeClock  # noqa: E402

# pytest-asyncio runs in auto mode (see pyproject.toml)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """
    Settings for tests: no Redis connection at startup, quiet logs.

    Constructor arguments take precedence over environment variables, so a
    developer's .env cannot leak into the suite.
    """
    return Settings(
        ENVIRONMENT="test",
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
        SHARED_CACHE_ENABLED=False,
        CACHE_SHARED_TIER_ENABLED=False,
        CACHE_SINGLE_FLIGHT_ENABLED=True,
        CACHE_RESPONSE_PATHS=["/content/levels"],
    )


# ============================================================================
# Cache Fixtures
# ============================================================================


@pytest.fixture
def fake_clock():
    """Manually advanced clock for deterministic expiry."""
    return FakeClock()


@pytest.fixture
def ttl_cache(fake_clock):
    """TTLCache driven by the fake clock (no sweep task started)."""
    from content_cache.infrastructure.cache.ttl_cache import TTLCache

    return TTLCache(default_ttl=300, check_period=60, clock=fake_clock)


@pytest.fixture
def orchestrator(ttl_cache):
    """Local-only orchestrator with single-flight enabled."""
    from content_cache.infrastructure.cache.cache_aside import CacheAsideOrchestrator

    return CacheAsideOrchestrator(ttl_cache)


@pytest.fixture
def fake_redis():
    """Dict-backed redis.asyncio double."""
    return CacheTestFactory.redis_client_with_data()


@pytest.fixture
def failing_redis():
    """redis.asyncio double where every command raises ConnectionError."""
    return CacheTestFactory.failing_redis_client()


@pytest.fixture
def shared_cache(test_settings, fake_redis):
    """SharedCacheClient attached to the dict-backed Redis double."""
    from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient

    return SharedCacheClient(settings=test_settings, client=fake_redis)


@pytest.fixture
def broken_shared_cache(test_settings, failing_redis):
    """SharedCacheClient whose Redis fails on every call."""
    from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient

    return SharedCacheClient(settings=test_settings, client=failing_redis)


# ============================================================================
# Content Fixtures
# ============================================================================


@pytest.fixture
def content_store():
    """In-memory store with two levels, two industries and four cards."""
    return ContentTestFactory.store()


@pytest.fixture
def failing_store():
    return ContentTestFactory.failing_store()
