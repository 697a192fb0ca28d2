"""
Unit Tests for the Exception Hierarchy
"""

import pytest

from content_cache.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheSerializationError,
    ConfigurationError,
    ContentCacheError,
    NotFoundError,
    StoreError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_class",
        [ConfigurationError, CacheError, CacheConnectionError, CacheSerializationError, StoreError, NotFoundError],
    )
    def test_all_inherit_from_base(self, exc_class):
        assert issubclass(exc_class, ContentCacheError)

    def test_not_found_is_a_store_error(self):
        """Handlers for StoreError must also see NotFoundError."""
        assert issubclass(NotFoundError, StoreError)

    def test_cache_errors_share_a_base(self):
        assert issubclass(CacheConnectionError, CacheError)
        assert issubclass(CacheSerializationError, CacheError)


@pytest.mark.unit
class TestContentCacheError:
    def test_to_dict(self):
        error = StoreError("Query failed", request_id="req-1", details={"table": "flashcards"})

        assert error.to_dict() == {
            "error_type": "StoreError",
            "message": "Query failed",
            "request_id": "req-1",
            "details": {"table": "flashcards"},
        }

    def test_with_context_merges_details_and_chains(self):
        error = NotFoundError("Flashcard not found", details={"flashcard_id": "x"})

        result = error.with_context(language="french")

        assert result is error
        assert error.details == {"flashcard_id": "x", "language": "french"}

    def test_details_are_copied(self):
        details = {"key": "value"}
        error = CacheError("boom", details=details)
        error.with_context(extra=1)

        assert details == {"key": "value"}

    def test_str_is_message(self):
        assert str(CacheError("cache down")) == "cache down"

    def test_repr_includes_details(self):
        error = StoreError("Query failed", details={"table": "levels"})
        assert "StoreError(message='Query failed'" in repr(error)
        assert "levels" in repr(error)

    def test_from_exception_preserves_original(self):
        original = OSError("connection reset")

        error = StoreError.from_exception(original, table="flashcards")

        assert isinstance(error, StoreError)
        assert error.message == "connection reset"
        assert error.details["original_error"] == "OSError"
        assert error.details["table"] == "flashcards"
