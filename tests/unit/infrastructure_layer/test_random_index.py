"""
Unit Tests for RandomSelectionIndex
"""

import random
from collections import Counter
from unittest.mock import AsyncMock

import pytest

from content_cache.core.exceptions import StoreError
from content_cache.infrastructure.index.random_index import RandomSelectionIndex
from tests.test_fixtures import ContentTestFactory


def store_with_entries(*specs):
    store = AsyncMock()
    store.list_flashcard_index = AsyncMock(return_value=ContentTestFactory.index_entries(*specs))
    return store


@pytest.mark.unit
class TestRandomIndexLoading:
    @pytest.mark.asyncio
    async def test_initialize_loads_every_entry(self, content_store):
        index = RandomSelectionIndex(content_store)

        assert await index.initialize() == 4
        assert index.size == 4
        assert not index.is_empty

    @pytest.mark.asyncio
    async def test_store_failure_leaves_index_empty(self, failing_store):
        index = RandomSelectionIndex(failing_store)

        assert await index.initialize() == 0
        assert index.is_empty
        assert index.pick_random() is None

    @pytest.mark.asyncio
    async def test_reload_replaces_wholesale(self):
        store = store_with_entries(("a", 1, 1), ("b", 1, 1))
        index = RandomSelectionIndex(store)
        await index.initialize()

        store.list_flashcard_index.return_value = ContentTestFactory.index_entries(("z", 2, 2))
        await index.initialize()

        assert index.size == 1
        assert index.pick_random() == "z"

    @pytest.mark.asyncio
    async def test_failed_reload_empties_previous_entries(self):
        store = store_with_entries(("a", 1, 1))
        index = RandomSelectionIndex(store)
        await index.initialize()

        store.list_flashcard_index.side_effect = StoreError("gone")
        await index.initialize()

        assert index.is_empty


@pytest.mark.unit
class TestRandomIndexSelection:
    @pytest.mark.asyncio
    async def test_filters_by_industry_and_level(self):
        index = RandomSelectionIndex(
            store_with_entries(("a", 1, 1), ("b", 2, 1), ("c", 1, 2)),
            rng=random.Random(7),
        )
        await index.initialize()

        picks = {index.pick_random(industry_id=1, level_id=1) for _ in range(50)}

        assert picks == {"a"}

    @pytest.mark.asyncio
    async def test_single_filter(self):
        index = RandomSelectionIndex(
            store_with_entries(("a", 1, 1), ("b", 2, 1), ("c", 1, 2)),
            rng=random.Random(7),
        )
        await index.initialize()

        picks = {index.pick_random(level_id=1) for _ in range(200)}

        assert picks == {"a", "b"}

    @pytest.mark.asyncio
    async def test_general_entries_only_match_without_industry_filter(self):
        index = RandomSelectionIndex(store_with_entries(("g", None, 1)))
        await index.initialize()

        assert index.pick_random(industry_id=1) is None
        assert index.pick_random(level_id=1) == "g"

    @pytest.mark.asyncio
    async def test_no_match_returns_none(self, content_store):
        index = RandomSelectionIndex(content_store)
        await index.initialize()

        assert index.pick_random(industry_id=99) is None

    @pytest.mark.asyncio
    async def test_selection_is_roughly_uniform(self):
        index = RandomSelectionIndex(
            store_with_entries(("a", 1, 1), ("b", 1, 1), ("c", 1, 1)),
            rng=random.Random(12345),
        )
        await index.initialize()

        counts = Counter(index.pick_random() for _ in range(3000))

        assert set(counts) == {"a", "b", "c"}
        assert all(800 < count < 1200 for count in counts.values())


@pytest.mark.unit
class TestRandomIndexReload:
    @pytest.mark.asyncio
    async def test_pick_or_reload_rebuilds_empty_index(self, content_store):
        index = RandomSelectionIndex(content_store)

        picked = await index.pick_random_or_reload(level_id=2)

        assert picked == "d"
        assert index.size == 4

    @pytest.mark.asyncio
    async def test_pick_or_reload_skips_reload_when_populated(self):
        store = store_with_entries(("a", 1, 1))
        index = RandomSelectionIndex(store)
        await index.initialize()

        await index.pick_random_or_reload()

        store.list_flashcard_index.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalidate_forces_reload(self, content_store):
        index = RandomSelectionIndex(content_store)
        await index.initialize()
        content_store.add_flashcard(ContentTestFactory.flashcard("new", level_id=9))

        index.invalidate()
        assert index.is_empty

        assert await index.pick_random_or_reload(level_id=9) == "new"

    @pytest.mark.asyncio
    async def test_pick_or_reload_with_failing_store(self, failing_store):
        index = RandomSelectionIndex(failing_store)

        assert await index.pick_random_or_reload() is None
