"""
Unit Tests for InMemoryContentStore
"""

import pytest

from content_cache.core.exceptions import NotFoundError, StoreError
from content_cache.core.interfaces.store import ContentStore
from content_cache.infrastructure.store.memory_store import InMemoryContentStore


@pytest.mark.unit
class TestInMemoryContentStore:
    def test_satisfies_protocol(self, content_store):
        assert isinstance(content_store, ContentStore)

    @pytest.mark.asyncio
    async def test_list_industries_sorted_by_name(self, content_store):
        names = [industry.name for industry in await content_store.list_industries()]

        assert names == sorted(names)

    @pytest.mark.asyncio
    async def test_list_flashcards_filters(self, content_store):
        level_one = await content_store.list_flashcards(level_id=1)
        industry_one = await content_store.list_flashcards(industry_id=1)
        both = await content_store.list_flashcards(industry_id=1, level_id=2)

        assert {card.id for card in level_one} == {"a", "b", "c"}
        assert {card.id for card in industry_one} == {"a", "d"}
        assert [card.id for card in both] == ["d"]

    @pytest.mark.asyncio
    async def test_get_flashcard_unknown_id(self, content_store):
        with pytest.raises(NotFoundError) as exc_info:
            await content_store.get_flashcard("nope")

        assert isinstance(exc_info.value, StoreError)
        assert exc_info.value.details == {"flashcard_id": "nope"}

    @pytest.mark.asyncio
    async def test_index_entries_mirror_cards(self, content_store):
        entries = await content_store.list_flashcard_index()

        assert {(e.id, e.industry_id, e.level_id) for e in entries} == {
            ("a", 1, 1), ("b", 2, 1), ("c", None, 1), ("d", 1, 2),
        }

    @pytest.mark.asyncio
    async def test_every_query_is_counted(self, content_store):
        await content_store.list_industries()
        await content_store.list_levels()
        await content_store.get_flashcard("a")

        assert content_store.query_count == 3

    @pytest.mark.asyncio
    async def test_sample_data(self):
        store = InMemoryContentStore.with_sample_data()

        assert len(await store.list_industries()) == 2
        assert len(await store.list_flashcard_index()) == 4
        card = await store.get_flashcard("fc-001")
        assert card.term_french == "Ordonnance"
