"""
Cache-Aside Orchestrator

Architecture:
    Request -> with_cache(key, fetch_fn, ttl)
        │
        ├─ TIER 1: TTLCache (in-process)        hit -> return
        ├─ TIER 2: SharedCacheClient (optional) hit -> backfill L1, return
        └─ FETCH:  fetch_fn()                   store L1 (+ L2), return

Single-flight:
    Concurrent misses for one key share a single pending fetch task. Every
    waiter gets the same result, or the same exception. The in-flight table
    only holds keys whose fetch has not finished yet.

    Disabled via CACHE_SINGLE_FLIGHT_ENABLED=false: every miss fetches, last
    write wins.

Failure semantics:
    - fetch_fn errors propagate unmodified and nothing is written
    - shared tier errors are already absorbed by SharedCacheClient
    - a shared value that cannot be decoded is treated as a miss

Author: System Architect
Date: 2026-10-02
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import orjson
from fastapi import Request
from fastapi.responses import JSONResponse

from content_cache.core.config.constants import CacheTier, Stage
from content_cache.core.logging.logger import get_logger, log_stage
from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient
from content_cache.infrastructure.cache.ttl_cache import TTLCache
from content_cache.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)

logger = get_logger(__name__)

T = TypeVar("T")

FetchFn = Callable[[], Awaitable[T] | T]


class CacheAsideOrchestrator:
    """
    Returns cached values or computes, stores and returns them.

    Usage:
        orchestrator = CacheAsideOrchestrator(TTLCache(default_ttl=300))

        industries = await orchestrator.with_cache(
            "industries:all", store.list_industries, ttl=3600
        )

    A cached value of None is indistinguishable from a miss; fetch functions
    that legitimately return None are re-run on every call.
    """

    def __init__(
        self,
        local: TTLCache[Any],
        shared: SharedCacheClient | None = None,
        single_flight: bool = True,
        metrics: MetricsCollector | None = None,
    ):
        """
        Args:
            local: In-process cache; its stats collector counts every lookup
            shared: Optional Redis tier consulted after a local miss
            single_flight: Collapse concurrent misses for the same key
            metrics: Metrics collector (global by default)
        """
        self._local = local
        self._shared = shared
        self._single_flight = single_flight
        self._metrics = metrics or get_metrics_collector()
        self._in_flight: dict[str, asyncio.Task] = {}

    @property
    def local(self) -> TTLCache[Any]:
        return self._local

    @property
    def shared(self) -> SharedCacheClient | None:
        return self._shared

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    # -------------------------------------------------------------------------
    # Cache-aside
    # -------------------------------------------------------------------------

    async def with_cache(self, key: str, fetch_fn: FetchFn[T], ttl: float | None = None) -> T:
        """
        Return the cached value for ``key`` or compute it with ``fetch_fn``.

        Args:
            key: Cache key (usually from build_cache_key)
            fetch_fn: Zero-argument callable, sync or async
            ttl: Seconds to keep the result; None uses the cache default

        Raises:
            Whatever ``fetch_fn`` raises
        """
        cached = self._local.get(key)
        if cached is not None:
            self._metrics.record_cache_hit(CacheTier.LOCAL.value)
            log_stage(logger, Stage.CACHE_GET, "Cache hit", level="debug", cache_key=key)
            return cached

        self._metrics.record_cache_miss(CacheTier.LOCAL.value)
        log_stage(logger, Stage.CACHE_GET, "Cache miss", level="debug", cache_key=key)

        if not self._single_flight:
            return await self._load(key, fetch_fn, ttl)

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.create_task(self._flight(key, fetch_fn, ttl))
            self._in_flight[key] = task
        else:
            self._metrics.record_single_flight_join()
            log_stage(logger, Stage.CACHE_FETCH, "Joined in-flight fetch", level="debug", cache_key=key)

        # Cancelling one waiter must not cancel the fetch the others wait on
        return await asyncio.shield(task)

    async def _flight(self, key: str, fetch_fn: FetchFn[T], ttl: float | None) -> T:
        try:
            return await self._load(key, fetch_fn, ttl)
        finally:
            self._in_flight.pop(key, None)

    async def _load(self, key: str, fetch_fn: FetchFn[T], ttl: float | None) -> T:
        if self._shared is not None:
            found, value = await self._read_shared(key)
            if found:
                self._local.set(key, value, ttl)
                return value

        try:
            result = fetch_fn()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            self._metrics.record_fetch("failure")
            log_stage(
                logger, Stage.CACHE_FETCH, "Fetch failed, nothing cached", level="warning",
                cache_key=key, error=str(e), error_type=type(e).__name__,
            )
            raise

        self._metrics.record_fetch("success")
        self._local.set(key, result, ttl)

        if self._shared is not None:
            await self._write_shared(key, result, ttl)

        return result

    async def _read_shared(self, key: str) -> tuple[bool, Any]:
        shared_result = await self._shared.try_get(key)
        if not shared_result.is_hit:
            return False, None

        try:
            return True, orjson.loads(shared_result.value)
        except orjson.JSONDecodeError as e:
            log_stage(
                logger, Stage.SHARED_GET, "Undecodable shared cache value, refetching",
                level="warning", cache_key=key, error=str(e),
            )
            return False, None

    async def _write_shared(self, key: str, value: Any, ttl: float | None) -> None:
        try:
            payload = orjson.dumps(value).decode("utf-8")
        except TypeError as e:
            log_stage(
                logger, Stage.SHARED_SET, "Value not JSON-serializable, shared write skipped",
                level="warning", cache_key=key, error=str(e),
            )
            return

        expire = int(self._local.default_ttl if ttl is None else ttl)
        if expire <= 0:
            # Redis SETEX needs a positive expiry; keep no-expiry values local
            return
        await self._shared.try_set(key, expire, payload)

    async def handle_with_cache(
        self,
        request: Request,
        key: str,
        fetch_fn: FetchFn[Any],
        ttl: float | None = None,
    ) -> JSONResponse:
        """
        with_cache() rendered straight into a JSON response.

        Raises:
            Whatever ``fetch_fn`` raises, after logging it
        """
        try:
            result = await self.with_cache(key, fetch_fn, ttl)
        except Exception as e:
            logger.error(
                "Error in cached operation",
                stage=Stage.CACHE_FETCH.value,
                cache_key=key,
                path=request.url.path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        return JSONResponse(content=result)

    # -------------------------------------------------------------------------
    # Management
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Flush the local tier. Hit/miss counters are kept."""
        self._local.flush_all()
        logger.info("All cache cleared", stage=Stage.CACHE_FLUSH.value)

    def stats(self) -> dict[str, Any]:
        """
        Returns:
            {"keys": int, "hits": int, "misses": int, "hit_rate": float}
        """
        collector = self._local.stats_collector
        return {
            "keys": len(self._local),
            "hits": collector.hits,
            "misses": collector.misses,
            "hit_rate": collector.hit_rate(),
        }

    def reset_stats(self) -> None:
        self._local.stats_collector.reset()
        logger.info("Cache statistics reset", stage=Stage.CACHE_FLUSH.value)
