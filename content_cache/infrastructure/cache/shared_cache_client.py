"""
Best-Effort Shared Cache Client (Redis)

Architecture:
    SharedCacheClient (Public API)
        ├── ConnectionManager (Connection lifecycle and pooling)
        ├── BestEffortExecutor (Command execution; failures become "absent")
        └── HealthMonitor (Health checks)

The shared cache is advisory. Every operation catches transport and service
errors, logs them, counts them, and answers as if the cache were empty:

    get      -> None          set_ex -> False
    delete   -> 0             keys   -> []
    try_get  -> UNAVAILABLE   try_set -> UNAVAILABLE

Nothing here raises to request handlers, so the service stays fully
functional with Redis permanently unreachable, only slower.

Values travel as JSON text; get_json/set_json encode with orjson.

Author: System Architect
Date: 2026-10-02
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

import orjson
import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool
from redis.exceptions import RedisError

from content_cache.core.config.constants import CacheOutcome, Stage
from content_cache.core.config.settings import Settings, get_settings
from content_cache.core.exceptions import CacheConnectionError, CacheSerializationError
from content_cache.core.logging.logger import get_logger, log_stage
from content_cache.infrastructure.monitoring.metrics_collector import (
    MetricsCollector,
    get_metrics_collector,
)

logger = get_logger(__name__)

T = TypeVar("T")

# Failures that mean "the shared cache is not usable right now"
TRANSPORT_ERRORS = (RedisError, OSError, asyncio.TimeoutError, CacheConnectionError)


@dataclass(frozen=True, slots=True)
class SharedCacheResult:
    """Outcome-tagged read result."""

    outcome: CacheOutcome
    value: str | None = None

    @property
    def is_hit(self) -> bool:
        return self.outcome is CacheOutcome.HIT


# =============================================================================
# LAYER 1: CONNECTION MANAGEMENT
# =============================================================================


class ConnectionManager:
    """
    Manages Redis connection lifecycle and pooling.

    Pool Configuration:
    - Max connections: REDIS_MAX_CONNECTIONS
    - Short socket timeouts so a dead Redis costs little per request
    - decode_responses=True (str in, str out)

    Reconnection:
    Once connect() has been called, a lost or never-established connection
    is retried lazily by reconnect_if_due(), at most once every
    REDIS_HEALTH_CHECK_INTERVAL seconds. disconnect() stops the retries.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._pool: ConnectionPool | None = None
        self._client: redis.Redis | None = None
        self._is_connected = False
        self._reconnect_enabled = False
        self._last_attempt: float | None = None

    async def connect(self) -> redis.Redis:
        """
        Establish connection to Redis with connection pooling.

        The client is only kept if the initial ping succeeds.

        Raises:
            CacheConnectionError: If the pool cannot reach Redis
        """
        if self._is_connected and self._client:
            return self._client

        redis_settings = self._settings.redis
        self._reconnect_enabled = True
        self._last_attempt = time.monotonic()

        try:
            pool = ConnectionPool(
                host=redis_settings.REDIS_HOST,
                port=redis_settings.REDIS_PORT,
                db=redis_settings.REDIS_DB,
                password=redis_settings.REDIS_PASSWORD,
                max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
                socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
                socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
                health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
                decode_responses=True,
            )
            client = redis.Redis(connection_pool=pool)

            # Verify the connection actually works
            await client.ping()

        except (RedisError, OSError, asyncio.TimeoutError) as e:
            self._client = None
            self._pool = None
            self._is_connected = False
            raise CacheConnectionError(
                message=f"Failed to connect to Redis: {e}",
                details={"host": redis_settings.REDIS_HOST, "port": redis_settings.REDIS_PORT},
            ) from e

        self._pool = pool
        self._client = client
        self._is_connected = True

        logger.info(
            "Redis connected successfully",
            stage=Stage.SHARED_CONNECT.value,
            host=redis_settings.REDIS_HOST,
            port=redis_settings.REDIS_PORT,
        )
        return client

    async def reconnect_if_due(self) -> bool:
        """
        Retry connect() if a connection was requested and the retry
        interval has elapsed since the last attempt. Never raises.

        Returns:
            True if connected after the call
        """
        if self._is_connected:
            return True
        if not self._reconnect_enabled:
            return False

        interval = self._settings.redis.REDIS_HEALTH_CHECK_INTERVAL
        if self._last_attempt is not None and time.monotonic() - self._last_attempt < interval:
            return False

        try:
            await self.connect()
        except CacheConnectionError as e:
            logger.warning(
                "Shared cache reconnect failed",
                stage=Stage.SHARED_CONNECT.value,
                error=e.message,
                retry_in_seconds=interval,
            )
            return False
        return True

    def attach(self, client: redis.Redis) -> None:
        """Use an already-constructed client (tests, custom wiring)."""
        self._client = client
        self._is_connected = True

    async def disconnect(self) -> None:
        if self._client:
            await self._client.aclose()
        if self._pool:
            await self._pool.disconnect()

        self._client = None
        self._pool = None
        self._is_connected = False
        self._reconnect_enabled = False
        logger.info("Redis disconnected", stage=Stage.SHARED_CONNECT.value)

    async def ping(self) -> bool:
        try:
            if self._client and self._is_connected:
                return bool(await self._client.ping())
        except TRANSPORT_ERRORS:
            pass
        return False

    def get_client(self) -> redis.Redis | None:
        return self._client

    def is_connected(self) -> bool:
        return self._is_connected


# =============================================================================
# LAYER 2: BEST-EFFORT EXECUTION
# =============================================================================


class BestEffortExecutor:
    """
    Runs Redis commands and converts every failure into a default value.

    Error Handling Strategy:
    - Not connected -> throttled reconnect attempt; if still down, default,
      logged at warning, counted
    - Transport/service error -> default, logged at warning, counted
    """

    def __init__(self, connection_manager: ConnectionManager, metrics: MetricsCollector):
        self._conn_mgr = connection_manager
        self._metrics = metrics

    async def run(
        self,
        operation: str,
        stage: Stage,
        command: Callable[[redis.Redis], Awaitable[T]],
        default: T,
        **log_context: Any,
    ) -> tuple[T, bool]:
        """
        Execute ``command`` against the live client.

        Returns:
            (result, ok) where ok is False if the default was substituted
        """
        if not self._conn_mgr.is_connected():
            await self._conn_mgr.reconnect_if_due()

        client = self._conn_mgr.get_client()
        if client is None or not self._conn_mgr.is_connected():
            log_stage(
                logger, stage, "Shared cache not connected", level="warning",
                operation=operation, **log_context,
            )
            self._metrics.record_shared_error(operation)
            return default, False

        try:
            return await command(client), True
        except TRANSPORT_ERRORS as e:
            log_stage(
                logger, stage, "Shared cache operation failed, treating as absent",
                level="warning", operation=operation, error=str(e),
                error_type=type(e).__name__, **log_context,
            )
            self._metrics.record_shared_error(operation)
            return default, False


# =============================================================================
# LAYER 3: HEALTH MONITORING
# =============================================================================


class HealthMonitor:
    """Health checks for the shared cache connection."""

    def __init__(self, connection_manager: ConnectionManager, settings: Settings):
        self._conn_mgr = connection_manager
        self._settings = settings

    async def health_check(self) -> dict[str, Any]:
        """
        Returns:
            Dict with status ("healthy" / "unavailable"), connection info and
            ping latency. Never raises.
        """
        health: dict[str, Any] = {
            "status": "healthy",
            "connected": self._conn_mgr.is_connected(),
            "host": self._settings.redis.REDIS_HOST,
            "port": self._settings.redis.REDIS_PORT,
            "ping_latency_ms": None,
        }

        client = self._conn_mgr.get_client()
        if client is None or not self._conn_mgr.is_connected():
            health["status"] = "unavailable"
            health["error"] = "Not connected"
            return health

        try:
            start = time.perf_counter()
            await client.ping()
            health["ping_latency_ms"] = round((time.perf_counter() - start) * 1000, 2)
        except TRANSPORT_ERRORS as e:
            health["status"] = "unavailable"
            health["error"] = str(e)

        return health


# =============================================================================
# LAYER 4: PUBLIC API
# =============================================================================


class SharedCacheClient:
    """
    Cross-process cache over Redis where every failure degrades to a miss.

    Usage:
        client = SharedCacheClient()
        await client.connect()          # logs and continues if Redis is down

        await client.set_ex("user:42", 3600, '{"id": "42"}')
        raw = await client.get("user:42")

        result = await client.try_get("user:42")
        if result.is_hit:
            ...

        await client.invalidate_pattern("user:*")
        await client.disconnect()
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: redis.Redis | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Args:
            settings: Application settings (global settings by default)
            client: Pre-built redis.asyncio client; skips pool creation
            metrics: Metrics collector (global by default)
        """
        self._settings = settings or get_settings()
        self._metrics = metrics or get_metrics_collector()
        self._conn_mgr = ConnectionManager(self._settings)
        self._executor = BestEffortExecutor(self._conn_mgr, self._metrics)
        self._health_monitor = HealthMonitor(self._conn_mgr, self._settings)

        if client is not None:
            self._conn_mgr.attach(client)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def connect(self) -> bool:
        """
        Connect to Redis.

        Returns:
            True if connected; False if Redis is unreachable (client keeps
            working in degraded mode)
        """
        try:
            await self._conn_mgr.connect()
            return True
        except CacheConnectionError as e:
            logger.warning(
                "Shared cache unavailable, continuing without it",
                stage=Stage.SHARED_CONNECT.value,
                error=e.message,
                **e.details,
            )
            return False

    async def disconnect(self) -> None:
        await self._conn_mgr.disconnect()

    async def ping(self) -> bool:
        return await self._conn_mgr.ping()

    @property
    def is_connected(self) -> bool:
        return self._conn_mgr.is_connected()

    async def health_check(self) -> dict[str, Any]:
        return await self._health_monitor.health_check()

    # -------------------------------------------------------------------------
    # Outcome-tagged operations
    # -------------------------------------------------------------------------

    async def try_get(self, key: str) -> SharedCacheResult:
        """Read ``key``; HIT, MISS or UNAVAILABLE."""
        value, ok = await self._executor.run(
            "get", Stage.SHARED_GET, lambda c: c.get(key), None, cache_key=key
        )
        if not ok:
            return SharedCacheResult(CacheOutcome.UNAVAILABLE)
        if value is None:
            self._metrics.record_cache_miss("shared")
            return SharedCacheResult(CacheOutcome.MISS)

        self._metrics.record_cache_hit("shared")
        return SharedCacheResult(CacheOutcome.HIT, value)

    async def try_set(self, key: str, ttl: int, value: str) -> CacheOutcome:
        """Write ``value`` with expiry; STORED or UNAVAILABLE."""
        _, ok = await self._executor.run(
            "setex", Stage.SHARED_SET, lambda c: c.setex(key, ttl, value), None,
            cache_key=key, ttl=ttl,
        )
        return CacheOutcome.STORED if ok else CacheOutcome.UNAVAILABLE

    # -------------------------------------------------------------------------
    # Plain operations
    # -------------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        """Value or None (absent or unavailable)."""
        return (await self.try_get(key)).value

    async def set_ex(self, key: str, ttl: int, value: str) -> bool:
        """SETEX; False if the write was skipped."""
        return await self.try_set(key, ttl, value) is CacheOutcome.STORED

    async def delete(self, *keys: str) -> int:
        """DEL; number of keys removed (0 if unavailable)."""
        if not keys:
            return 0
        deleted, _ = await self._executor.run(
            "delete", Stage.SHARED_DELETE, lambda c: c.delete(*keys), 0, keys=list(keys)
        )
        return int(deleted or 0)

    async def keys(self, pattern: str) -> list[str]:
        """KEYS pattern; [] if unavailable."""
        found, _ = await self._executor.run(
            "keys", Stage.SHARED_KEYS, lambda c: c.keys(pattern), [], pattern=pattern
        )
        return list(found or [])

    async def invalidate_pattern(self, pattern: str) -> int:
        """Delete every key matching ``pattern``. Returns count deleted."""
        matched = await self.keys(pattern)
        if not matched:
            return 0

        deleted = await self.delete(*matched)
        logger.info(
            "Shared cache keys invalidated",
            stage=Stage.SHARED_DELETE.value,
            pattern=pattern,
            deleted=deleted,
        )
        return deleted

    # -------------------------------------------------------------------------
    # JSON helpers
    # -------------------------------------------------------------------------

    async def get_json(self, key: str) -> Any | None:
        """
        Read and decode a JSON value.

        Raises:
            CacheSerializationError: The stored text is not valid JSON
        """
        raw = await self.get(key)
        if raw is None:
            return None
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise CacheSerializationError(
                message=f"Malformed JSON in shared cache: {e}", details={"key": key}
            ) from e

    async def set_json(self, key: str, ttl: int, value: Any) -> bool:
        """
        Encode ``value`` as JSON and store it.

        Raises:
            CacheSerializationError: ``value`` is not JSON-serializable
        """
        try:
            payload = orjson.dumps(value).decode("utf-8")
        except TypeError as e:
            raise CacheSerializationError(
                message=f"Value is not JSON-serializable: {e}", details={"key": key}
            ) from e
        return await self.set_ex(key, ttl, payload)
