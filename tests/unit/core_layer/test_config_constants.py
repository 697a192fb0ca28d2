"""
Unit Tests for System Constants
"""

import pytest

from content_cache.core.config.constants import (
    CACHE_KEY_NULL_TOKEN,
    DEFAULT_CACHE_TTL,
    DEFAULT_CHECK_PERIOD,
    TTL_FLASHCARDS,
    TTL_INDUSTRIES,
    CacheOutcome,
    CacheTier,
    Stage,
)


@pytest.mark.unit
class TestConstants:
    def test_stage_values_follow_area_operation_format(self):
        for stage in Stage:
            area, _, operation = stage.value.partition(".")
            assert area in {"CACHE", "SHARED", "INDEX", "HTTP"}
            assert operation and operation == operation.upper()

    def test_cache_defaults(self):
        assert DEFAULT_CACHE_TTL == 300
        assert DEFAULT_CHECK_PERIOD == 60
        assert CACHE_KEY_NULL_TOKEN == "null"

    def test_route_ttls(self):
        assert TTL_INDUSTRIES == 3600
        assert TTL_FLASHCARDS == 300

    def test_enum_values_are_strings(self):
        assert CacheTier.LOCAL.value == "local"
        assert CacheOutcome.UNAVAILABLE.value == "unavailable"
