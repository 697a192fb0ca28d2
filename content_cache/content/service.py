"""
Content Service

Cached read queries over the primary store. Each public method resolves a
cache key, then goes through CacheAsideOrchestrator.with_cache() with the
store query as the fetch function, so the store is only hit on a miss.

    Method              Key                                       TTL
    list_industries     industries:all                            3600
    list_levels         levels:industryId=..&language=..          3600
    list_flashcards     flashcards:industryId=..&language=..&..   300
    get_flashcard       flashcard:id=..&language=..               300
    random_flashcard    (not cached; RandomSelectionIndex)        -

Cached values are complete response envelopes (plain dicts), so they can be
handed to JSONResponse or to the shared tier without further conversion.

Author: System Architect
Date: 2026-10-02
"""

from typing import Any

from content_cache.content.locale import Locale
from content_cache.content.responses import success_response
from content_cache.core.config.constants import TTL_FLASHCARDS, TTL_INDUSTRIES, TTL_LEVELS
from content_cache.core.exceptions import NotFoundError
from content_cache.core.interfaces.store import ContentStore
from content_cache.core.logging.logger import get_logger
from content_cache.infrastructure.cache.cache_aside import CacheAsideOrchestrator
from content_cache.infrastructure.cache.key_builder import build_cache_key
from content_cache.infrastructure.index.random_index import RandomSelectionIndex

logger = get_logger(__name__)

INDUSTRIES_CACHE_KEY = "industries:all"


class ContentService:
    def __init__(
        self,
        orchestrator: CacheAsideOrchestrator,
        store: ContentStore,
        index: RandomSelectionIndex,
    ):
        self._orchestrator = orchestrator
        self._store = store
        self._index = index

    async def fetch_industries(self) -> dict[str, Any]:
        """Uncached industries query (the fetch function for industries:all)."""
        industries = await self._store.list_industries()
        return success_response(
            [industry.model_dump() for industry in industries],
            count=len(industries),
        )

    async def list_industries(self) -> dict[str, Any]:
        return await self._orchestrator.with_cache(
            INDUSTRIES_CACHE_KEY, self.fetch_industries, ttl=TTL_INDUSTRIES
        )

    async def list_levels(
        self, industry_id: int | None = None, language: Locale = Locale.ENGLISH
    ) -> dict[str, Any]:
        """
        Levels with the number of flashcards available in each.

        ``available_terms`` counts cards of the requested industry plus
        general (industry-less) cards; with no industry it counts every card.

        Raises:
            NotFoundError: The store has no levels
        """
        key = build_cache_key("levels", {"industryId": industry_id, "language": language})

        async def fetch() -> dict[str, Any]:
            levels = await self._store.list_levels()
            if not levels:
                raise NotFoundError("No levels found")

            payload = []
            for level in levels:
                cards = await self._store.list_flashcards(level_id=level.id)
                available = [
                    card for card in cards
                    if industry_id is None or card.industry_id in (industry_id, None)
                ]
                payload.append({**level.model_dump(), "available_terms": len(available)})

            return success_response(
                payload,
                count=len(payload),
                filters={"language": language.value, "industry_id": industry_id},
            )

        return await self._orchestrator.with_cache(key, fetch, ttl=TTL_LEVELS)

    async def list_flashcards(
        self,
        level_id: int | None = None,
        industry_id: int | None = None,
        language: Locale = Locale.ENGLISH,
    ) -> dict[str, Any]:
        key = build_cache_key(
            "flashcards",
            {"industryId": industry_id, "levelId": level_id, "language": language},
        )

        async def fetch() -> dict[str, Any]:
            cards = await self._store.list_flashcards(industry_id=industry_id, level_id=level_id)
            return success_response(
                [card.to_display(language) for card in cards],
                count=len(cards),
                filters={
                    "language": language.value,
                    "industry_id": industry_id,
                    "level_id": level_id,
                },
            )

        return await self._orchestrator.with_cache(key, fetch, ttl=TTL_FLASHCARDS)

    async def get_flashcard(
        self, flashcard_id: str, language: Locale = Locale.ENGLISH
    ) -> dict[str, Any]:
        """
        Raises:
            NotFoundError: Unknown id (not cached, so a later insert is seen)
        """
        key = build_cache_key("flashcard", {"id": flashcard_id, "language": language})

        async def fetch() -> dict[str, Any]:
            card = await self._store.get_flashcard(flashcard_id)
            return success_response(card.to_display(language))

        return await self._orchestrator.with_cache(key, fetch, ttl=TTL_FLASHCARDS)

    async def random_flashcard(
        self,
        level_id: int | None = None,
        industry_id: int | None = None,
        language: Locale = Locale.ENGLISH,
    ) -> dict[str, Any]:
        """
        One uniformly random flashcard among those matching the filters.

        Raises:
            NotFoundError: Nothing eligible, or the picked id vanished from
                the store since the index was loaded
        """
        flashcard_id = await self._index.pick_random_or_reload(
            industry_id=industry_id, level_id=level_id
        )
        if flashcard_id is None:
            raise NotFoundError(
                "No flashcards found",
                details={"industry_id": industry_id, "level_id": level_id},
            )

        card = await self._store.get_flashcard(flashcard_id)
        return success_response(
            card.to_display(language),
            filters={"language": language.value, "industry_id": industry_id, "level_id": level_id},
        )
