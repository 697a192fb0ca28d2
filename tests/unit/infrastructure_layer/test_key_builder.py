"""
Unit Tests for Cache Key Derivation
"""

import itertools

import pytest

from content_cache.content.locale import Locale
from content_cache.infrastructure.cache.key_builder import build_cache_key


@pytest.mark.unit
class TestBuildCacheKey:
    def test_absent_value_renders_null_placeholder(self):
        key = build_cache_key("level", {"levelId": "3", "language": None})

        assert key == "level:language=null&levelId=3"

    def test_independent_of_insertion_order(self):
        params = {"levelId": 2, "industryId": 7, "language": "french"}
        keys = {
            build_cache_key("flashcards", dict(permutation))
            for permutation in itertools.permutations(params.items())
        }

        assert keys == {"flashcards:industryId=7&language=french&levelId=2"}

    def test_differs_when_any_value_differs(self):
        base = {"levelId": 2, "industryId": 7}

        assert build_cache_key("f", base) != build_cache_key("f", {**base, "levelId": 3})
        assert build_cache_key("f", base) != build_cache_key("f", {**base, "industryId": None})

    def test_same_shape_with_absent_values_collides(self):
        """Absent parameters are never dropped, so the shape is part of the key."""
        assert build_cache_key("f", {"a": None}) == build_cache_key("f", {"a": None})
        assert build_cache_key("f", {"a": None}) != build_cache_key("f", {})

    def test_falsy_values_are_not_absent(self):
        assert build_cache_key("f", {"page": 0, "q": ""}) == "f:page=0&q="

    def test_booleans_and_enums(self):
        key = build_cache_key("f", {"active": True, "archived": False, "language": Locale.KOREAN})

        assert key == "f:active=true&archived=false&language=korean"

    def test_empty_params(self):
        assert build_cache_key("industries", {}) == "industries:"

    def test_delimiters_inside_values_cannot_forge_pairs(self):
        first = build_cache_key("p", {"a": "x&b=1", "b": "2"})
        second = build_cache_key("p", {"a": "x", "b": "1&b=2"})

        assert first != second
        assert first == "p:a=x%26b%3D1&b=2"

    def test_percent_is_escaped(self):
        assert build_cache_key("p", {"q": "%26"}) != build_cache_key("p", {"q": "&"})
        assert build_cache_key("p", {"q": "100%"}) == "p:q=100%25"
