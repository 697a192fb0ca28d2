"""
In-memory ContentStore for development and testing.

Implements the ContentStore protocol over plain lists. Note: this is NOT a
cache; it stands in for the primary database, and every call counts as a
store query (``query_count``), which tests use to observe cache behaviour.
"""

from collections.abc import Iterable

from content_cache.content.models import Flashcard, FlashcardIndexEntry, Industry, Level
from content_cache.core.exceptions import NotFoundError


class InMemoryContentStore:
    """
    Usage:
        store = InMemoryContentStore(
            industries=[Industry(id=1, name="Healthcare")],
            levels=[Level(id=1, name="Beginner")],
            flashcards=[Flashcard(id="f1", level_id=1, term_english="x", definition_english="y")],
        )
        await store.list_flashcards(level_id=1)
    """

    def __init__(
        self,
        industries: Iterable[Industry] = (),
        levels: Iterable[Level] = (),
        flashcards: Iterable[Flashcard] = (),
    ):
        self._industries = list(industries)
        self._levels = list(levels)
        self._flashcards = {card.id: card for card in flashcards}
        self.query_count = 0

    async def list_industries(self) -> list[Industry]:
        self.query_count += 1
        return sorted(self._industries, key=lambda industry: industry.name)

    async def list_levels(self) -> list[Level]:
        self.query_count += 1
        return sorted(self._levels, key=lambda level: level.id)

    async def list_flashcards(
        self, industry_id: int | None = None, level_id: int | None = None
    ) -> list[Flashcard]:
        self.query_count += 1
        return [
            card
            for card in self._flashcards.values()
            if (industry_id is None or card.industry_id == industry_id)
            and (level_id is None or card.level_id == level_id)
        ]

    async def get_flashcard(self, flashcard_id: str) -> Flashcard:
        self.query_count += 1
        card = self._flashcards.get(flashcard_id)
        if card is None:
            raise NotFoundError(
                "Flashcard not found", details={"flashcard_id": flashcard_id}
            )
        return card

    async def list_flashcard_index(self) -> list[FlashcardIndexEntry]:
        self.query_count += 1
        return [
            FlashcardIndexEntry(id=card.id, industry_id=card.industry_id, level_id=card.level_id)
            for card in self._flashcards.values()
        ]

    def add_flashcard(self, card: Flashcard) -> None:
        self._flashcards[card.id] = card

    @classmethod
    def with_sample_data(cls) -> "InMemoryContentStore":
        """Small seed dataset used when no real store is wired in."""
        return cls(
            industries=[
                Industry(id=1, name="Healthcare"),
                Industry(id=2, name="Construction"),
            ],
            levels=[
                Level(id=1, name="Beginner", description="Everyday workplace vocabulary"),
                Level(id=2, name="Intermediate"),
            ],
            flashcards=[
                Flashcard(
                    id="fc-001", level_id=1, industry_id=1,
                    term_english="Prescription",
                    definition_english="A written order for medication",
                    term_french="Ordonnance",
                    definition_french="Un document écrit pour un médicament",
                ),
                Flashcard(
                    id="fc-002", level_id=1, industry_id=2,
                    term_english="Scaffold",
                    definition_english="A temporary structure used during construction",
                    term_spanish="Andamio",
                ),
                Flashcard(
                    id="fc-003", level_id=1,
                    term_english="Deadline",
                    definition_english="The latest time something must be finished",
                ),
                Flashcard(
                    id="fc-004", level_id=2, industry_id=1,
                    term_english="Diagnosis",
                    definition_english="Identification of an illness",
                    term_korean="진단",
                ),
            ],
        )
