"""
Content Store Protocol

The primary data store is an external collaborator. The cache layer only
needs the handful of read queries below; any backend (SQL, document store,
in-memory fixture) that implements them can be plugged in at startup.

Architectural Decision: Protocol-based abstraction
- Routes and services depend on the protocol, never on a driver
- Tests swap in InMemoryContentStore or an AsyncMock
- Failures surface as StoreError so callers handle one exception family

Author: System Architect
Date: 2026-10-02
"""

from typing import Protocol, runtime_checkable

from content_cache.content.models import Flashcard, FlashcardIndexEntry, Industry, Level


@runtime_checkable
class ContentStore(Protocol):
    """
    Read-only queries against the primary content store.

    Implementations:
    - InMemoryContentStore: development and tests

    All methods raise StoreError (or a subclass) on failure.
    """

    async def list_industries(self) -> list[Industry]:
        """All industries, ordered by name."""
        ...

    async def list_levels(self) -> list[Level]:
        """All levels, ordered by id."""
        ...

    async def list_flashcards(
        self, industry_id: int | None = None, level_id: int | None = None
    ) -> list[Flashcard]:
        """
        Flashcards matching every supplied filter (None means unfiltered).
        """
        ...

    async def get_flashcard(self, flashcard_id: str) -> Flashcard:
        """
        Raises:
            NotFoundError: No flashcard has this id
        """
        ...

    async def list_flashcard_index(self) -> list[FlashcardIndexEntry]:
        """Lightweight projection of every flashcard for the random index."""
        ...
