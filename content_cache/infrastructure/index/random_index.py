"""
Random Selection Index

Architecture:
    ContentStore.list_flashcard_index()  (once at startup, and on demand)
        │
        ▼
    [FlashcardIndexEntry(id, industry_id, level_id), ...]   resident in memory
        │
        ▼
    pick_random(industry_id?, level_id?) -> id    (no store query per request)

The index is a best-effort copy of identifiers, never a source of truth. It
is replaced wholesale on every load and never reconciled entry by entry.
A failed load leaves it empty; the next pick_random_or_reload() retries.

Author: System Architect
Date: 2026-10-02
"""

import random

from content_cache.content.models import FlashcardIndexEntry
from content_cache.core.config.constants import Stage
from content_cache.core.interfaces.store import ContentStore
from content_cache.core.logging.logger import get_logger, log_stage
from content_cache.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)

logger = get_logger(__name__)


class RandomSelectionIndex:
    """
    Usage:
        index = RandomSelectionIndex(store)
        await index.initialize()

        flashcard_id = await index.pick_random_or_reload(level_id=2)
        if flashcard_id is None:
            ...  # nothing eligible
    """

    def __init__(
        self,
        store: ContentStore,
        rng: random.Random | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Args:
            store: Primary store the index is loaded from
            rng: Random source, seedable for tests
            metrics: Metrics collector (global by default)
        """
        self._store = store
        self._rng = rng or random.Random()
        self._metrics = metrics or get_metrics_collector()
        self._entries: list[FlashcardIndexEntry] = []

    async def initialize(self) -> int:
        """
        Load the index from the store, replacing whatever was there.

        Never raises. On a store failure the index is left empty.

        Returns:
            Number of entries loaded
        """
        try:
            entries = await self._store.list_flashcard_index()
        except Exception as e:
            self._entries = []
            self._metrics.set_index_size(0)
            self._metrics.record_error(type(e).__name__, Stage.INDEX_INIT.value)
            log_stage(
                logger, Stage.INDEX_INIT, "Random index load failed, index left empty",
                level="error", error=str(e), error_type=type(e).__name__,
            )
            return 0

        self._entries = list(entries)
        self._metrics.set_index_size(len(self._entries))
        log_stage(logger, Stage.INDEX_INIT, "Random index loaded", entries=len(self._entries))
        return len(self._entries)

    def pick_random(
        self, industry_id: int | None = None, level_id: int | None = None
    ) -> str | None:
        """
        Uniformly pick one id among entries matching every supplied filter.

        Returns:
            Flashcard id, or None when the index is empty or nothing matches
        """
        if not self._entries:
            return None

        eligible = [
            entry
            for entry in self._entries
            if (industry_id is None or entry.industry_id == industry_id)
            and (level_id is None or entry.level_id == level_id)
        ]
        if not eligible:
            log_stage(
                logger, Stage.INDEX_PICK, "No eligible entries", level="debug",
                industry_id=industry_id, level_id=level_id,
            )
            return None

        return eligible[self._rng.randrange(len(eligible))].id

    async def pick_random_or_reload(
        self, industry_id: int | None = None, level_id: int | None = None
    ) -> str | None:
        """pick_random(), reloading the index first if it is empty."""
        if not self._entries:
            log_stage(logger, Stage.INDEX_PICK, "Random index empty, reloading", level="info")
            await self.initialize()
        return self.pick_random(industry_id=industry_id, level_id=level_id)

    def invalidate(self) -> None:
        """Drop every entry; the next pick_random_or_reload() rebuilds."""
        self._entries = []
        self._metrics.set_index_size(0)
        log_stage(logger, Stage.INDEX_INIT, "Random index invalidated")

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries
