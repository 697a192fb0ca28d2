"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import pytest
from pydantic import ValidationError

from content_cache.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsDefaults:
    """Test Settings defaults and grouped views."""

    def test_settings_has_section_views(self):
        """Test that Settings exposes every configuration group."""
        settings = Settings()

        assert hasattr(settings, "app")
        assert hasattr(settings, "cache")
        assert hasattr(settings, "logging")
        assert hasattr(settings, "redis")

    def test_cache_defaults(self):
        """Local cache defaults: 5 minute TTL, 1 minute sweep."""
        settings = Settings(_env_file=None)

        assert settings.cache.CACHE_DEFAULT_TTL == 300
        assert settings.cache.CACHE_CHECK_PERIOD == 60
        assert settings.cache.CACHE_RESPONSE_TTL == 300
        assert settings.cache.CACHE_SINGLE_FLIGHT_ENABLED is True
        assert settings.cache.CACHE_SHARED_TIER_ENABLED is False
        assert settings.cache.CACHE_RESPONSE_PATHS == ["/content/levels"]

    def test_redis_settings_have_valid_defaults(self):
        settings = Settings(_env_file=None)

        assert isinstance(settings.redis.REDIS_PORT, int)
        assert 1000 <= settings.redis.REDIS_PORT <= 65535
        assert settings.redis.REDIS_DB >= 0
        assert settings.redis.REDIS_SOCKET_TIMEOUT > 0

    def test_section_views_reflect_overrides(self):
        settings = Settings(CACHE_DEFAULT_TTL=42, REDIS_HOST="cache.internal", API_BASE_PATH="/v2")

        assert settings.cache.CACHE_DEFAULT_TTL == 42
        assert settings.redis.REDIS_HOST == "cache.internal"
        assert settings.app.API_BASE_PATH == "/v2"


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validators."""

    def test_log_level_is_normalized_to_uppercase(self):
        settings = Settings(LOG_LEVEL="debug")
        assert settings.LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="LOUD")

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValidationError):
            Settings(CACHE_DEFAULT_TTL=-1)

    def test_zero_ttl_allowed(self):
        """0 means entries never expire."""
        settings = Settings(CACHE_DEFAULT_TTL=0)
        assert settings.CACHE_DEFAULT_TTL == 0

    def test_non_positive_check_period_rejected(self):
        with pytest.raises(ValidationError):
            Settings(CACHE_CHECK_PERIOD=0)

    def test_environment_values_are_closed(self):
        with pytest.raises(ValidationError):
            Settings(ENVIRONMENT="qa")


@pytest.mark.unit
class TestSettingsSingleton:
    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        before = get_settings()
        after = reload_settings()

        assert after is not before
        assert get_settings() is after
