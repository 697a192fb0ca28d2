#!/usr/bin/env python3
"""
In-Process TTL Cache

Architecture:
    TTLCache (Public API)
        ├── CacheEntry (value + absolute expiry)
        ├── CacheStatsCollector (hit/miss accounting)
        └── Sweep task (periodic removal of expired entries)

Expiry is enforced twice:
    - Lazily: a get() that finds an expired entry deletes it and reports a miss
    - Proactively: a background asyncio task sweeps every ``check_period``
      seconds so keys that are never read again do not pile up

All operations except start()/stop() are synchronous. The service runs on a
single event loop, so the entry dict is only touched between suspension
points and needs no lock.

Author: System Architect
Date: 2026-10-02
"""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from content_cache.core.config.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_CHECK_PERIOD,
    Stage,
)
from content_cache.core.logging.logger import get_logger, log_stage
from content_cache.infrastructure.cache.stats import CacheStatsCollector

logger = get_logger(__name__)

V = TypeVar("V")


@dataclass(slots=True)
class CacheEntry(Generic[V]):
    """
    One stored value.

    ``expires_at`` is an absolute reading of the cache clock; None means the
    entry was written with ttl=0 and never expires.
    """

    key: str
    value: V
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class TTLCache(Generic[V]):
    """
    Expiring key/value store owned by a single process.

    Usage:
        cache: TTLCache[dict] = TTLCache(default_ttl=300, check_period=60)
        await cache.start()          # begin background sweep

        cache.set("industries:all", payload, ttl=3600)
        cache.get("industries:all")  # payload (hit recorded)

        cache.stats()                # {"keys": 1, "hits": 1, "misses": 0}
        await cache.stop()

    Semantics:
    - A key maps to at most one live entry; set() overwrites value and expiry
    - ttl=None uses ``default_ttl``; ttl=0 stores without expiry
    - get() returns None for absent and expired keys
    - flush_all() leaves the hit/miss counters alone
    """

    def __init__(
        self,
        default_ttl: int = DEFAULT_CACHE_TTL,
        check_period: float = DEFAULT_CHECK_PERIOD,
        stats: CacheStatsCollector | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            default_ttl: TTL in seconds applied when set() gets no ttl
            check_period: Seconds between background sweeps
            stats: Collector to record hits/misses in (a fresh one by default)
            clock: Monotonic time source, injectable for tests
        """
        self._default_ttl = default_ttl
        self._check_period = check_period
        self._stats = stats or CacheStatsCollector()
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}
        self._sweep_task: asyncio.Task | None = None

    # -------------------------------------------------------------------------
    # Core Operations
    # -------------------------------------------------------------------------

    def set(self, key: str, value: V, ttl: float | None = None) -> None:
        """
        Store ``value`` under ``key``, replacing any existing entry.

        Args:
            key: Cache key
            value: Any in-process object; stored by reference
            ttl: Seconds to live; None -> default, 0 -> no expiry
        """
        ttl = self._default_ttl if ttl is None else ttl
        expires_at = None if ttl == 0 else self._clock() + ttl
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)
        log_stage(logger, Stage.CACHE_SET, "Cache set", level="debug", cache_key=key, ttl=ttl)

    def get(self, key: str) -> V | None:
        """
        Return the live value for ``key`` or None.

        Records exactly one hit or miss. An expired entry is removed here.
        """
        entry = self._entries.get(key)

        if entry is None:
            self._stats.record_miss()
            return None

        if entry.is_expired(self._clock()):
            # Lazy deletion
            del self._entries[key]
            self._stats.record_miss()
            return None

        self._stats.record_hit()
        return entry.value

    def has(self, key: str) -> bool:
        """True if ``key`` holds a live entry. No stats side effect."""
        entry = self._entries.get(key)
        return entry is not None and not entry.is_expired(self._clock())

    def delete(self, key: str) -> bool:
        """Remove ``key``. Returns False if it was not present."""
        removed = self._entries.pop(key, None) is not None
        if removed:
            log_stage(logger, Stage.CACHE_DELETE, "Cache entry deleted", level="debug", cache_key=key)
        return removed

    def flush_all(self) -> None:
        """Remove every entry."""
        count = len(self._entries)
        self._entries.clear()
        log_stage(logger, Stage.CACHE_FLUSH, "Cache flushed", removed=count)

    def keys(self) -> list[str]:
        """Keys of live entries."""
        now = self._clock()
        return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # -------------------------------------------------------------------------
    # Expiry Sweep
    # -------------------------------------------------------------------------

    def sweep(self) -> int:
        """
        Remove all expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

        if expired:
            log_stage(logger, Stage.CACHE_SWEEP, "Expired entries swept", level="debug", removed=len(expired))
        return len(expired)

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._check_period)
            self.sweep()

    async def start(self) -> None:
        """Start the background sweep task (idempotent)."""
        if self._sweep_task is not None and not self._sweep_task.done():
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info("Cache sweep started", stage=Stage.CACHE_SWEEP.value, check_period=self._check_period)

    async def stop(self) -> None:
        """Cancel the background sweep task."""
        if self._sweep_task is None:
            return
        self._sweep_task.cancel()
        try:
            await self._sweep_task
        except asyncio.CancelledError:
            pass
        self._sweep_task = None
        logger.info("Cache sweep stopped", stage=Stage.CACHE_SWEEP.value)

    @property
    def is_sweeping(self) -> bool:
        return self._sweep_task is not None and not self._sweep_task.done()

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    @property
    def stats_collector(self) -> CacheStatsCollector:
        return self._stats

    @property
    def default_ttl(self) -> int:
        return self._default_ttl

    def stats(self) -> dict[str, Any]:
        """
        Returns:
            {"keys": live-or-unswept entry count, "hits": int, "misses": int}
        """
        return {
            "keys": len(self._entries),
            "hits": self._stats.hits,
            "misses": self._stats.misses,
        }
