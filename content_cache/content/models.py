from typing import Any

from pydantic import BaseModel, Field

from content_cache.content.locale import Locale, fields_for


class Industry(BaseModel):
    """A professional domain flashcards can belong to (e.g. Healthcare)."""

    model_config = {"frozen": True}
    id: int
    name: str = Field(..., min_length=1)


class Level(BaseModel):
    """Difficulty level; every flashcard belongs to exactly one."""

    model_config = {"frozen": True}
    id: int
    name: str = Field(..., min_length=1)
    description: str | None = None


class Flashcard(BaseModel):
    """
    A term/definition pair with optional translations.

    Flashcards without an industry are general vocabulary and match any
    industry filter only when no industry is requested.
    """

    model_config = {"frozen": True}
    id: str = Field(..., min_length=1)
    level_id: int
    industry_id: int | None = None

    term_english: str
    definition_english: str
    term_french: str | None = None
    definition_french: str | None = None
    term_chinese: str | None = None
    definition_chinese: str | None = None
    term_spanish: str | None = None
    definition_spanish: str | None = None
    term_tagalog: str | None = None
    definition_tagalog: str | None = None
    term_punjabi: str | None = None
    definition_punjabi: str | None = None
    term_korean: str | None = None
    definition_korean: str | None = None

    def to_display(self, locale: Locale = Locale.ENGLISH) -> dict[str, Any]:
        """
        Client-facing shape: English always present, plus the requested
        translation when one exists.
        """
        display: dict[str, Any] = {
            "id": self.id,
            "term": {Locale.ENGLISH.value: self.term_english},
            "definition": {Locale.ENGLISH.value: self.definition_english},
            "industry_id": self.industry_id,
            "level_id": self.level_id,
        }

        if locale is not Locale.ENGLISH:
            fields = fields_for(locale)
            term = getattr(self, fields.term)
            definition = getattr(self, fields.definition)
            if term:
                display["term"][locale.value] = term
            if definition:
                display["definition"][locale.value] = definition

        return display


class FlashcardIndexEntry(BaseModel):
    """Projection of a flashcard kept resident by the random selection index."""

    model_config = {"frozen": True}
    id: str
    industry_id: int | None = None
    level_id: int
