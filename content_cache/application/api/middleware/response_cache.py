"""
Read-Through Response Cache Middleware
======================================

Serves whole JSON responses out of the shared (Redis) cache.

REQUEST FLOW:
-------------
    GET /api/v1/content/levels?industry_id=2
        │
        ├─ key = "cache:GET:http://host/api/v1/content/levels?industry_id=2"
        │
        ├─ shared cache HIT  -> cached JSON body, X-Cache: HIT
        │                       (handler never runs)
        │
        └─ MISS -> handler runs
                 ├─ status 200 -> body stored with SETEX(ttl), X-Cache: MISS
                 └─ otherwise  -> returned untouched, never stored

FAILURE MODES:
--------------
- Redis down: SharedCacheClient reports a miss and skips the write, so the
  response is exactly what the handler produced.
- Cached body is not valid JSON: CacheSerializationError propagates and the
  request fails (ErrorHandlingMiddleware turns it into a 500). The entry is
  left in place until it expires or is invalidated.

Only requests whose path starts with one of ``path_prefixes`` and whose
method is in ``methods`` are considered.
"""

from collections.abc import Callable, Iterable

import orjson
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from content_cache.core.config.constants import (
    DEFAULT_RESPONSE_TTL,
    HEADER_CACHE_STATUS,
    REDIS_KEY_HTTP_RESPONSE,
    Stage,
)
from content_cache.core.exceptions import CacheSerializationError
from content_cache.core.logging.logger import get_logger, log_stage
from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient
from content_cache.infrastructure.monitoring.metrics_collector import get_metrics_collector

logger = get_logger(__name__)


def response_cache_key(request: Request) -> str:
    return f"{REDIS_KEY_HTTP_RESPONSE}:{request.method}:{request.url}"


class ResponseCacheMiddleware(BaseHTTPMiddleware):
    """
    Args:
        app: The ASGI application
        ttl: Seconds a stored response lives in Redis
        path_prefixes: Paths the cache applies to (empty -> every path)
        methods: HTTP methods the cache applies to
        client: Shared cache client; when omitted, ``app.state.shared_cache``
            is used at request time (it only exists once lifespan has run)
    """

    def __init__(
        self,
        app,
        ttl: int = DEFAULT_RESPONSE_TTL,
        path_prefixes: Iterable[str] = (),
        methods: Iterable[str] = ("GET",),
        client: SharedCacheClient | None = None,
    ):
        super().__init__(app)
        self.ttl = ttl
        self.path_prefixes = tuple(path_prefixes)
        self.methods = frozenset(method.upper() for method in methods)
        self._client = client

    def _applies(self, request: Request) -> bool:
        if request.method not in self.methods:
            return False
        if not self.path_prefixes:
            return True
        return request.url.path.startswith(self.path_prefixes)

    def _resolve_client(self, request: Request) -> SharedCacheClient | None:
        if self._client is not None:
            return self._client
        return getattr(request.app.state, "shared_cache", None)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self._applies(request):
            return await call_next(request)

        client = self._resolve_client(request)
        if client is None:
            return await call_next(request)

        metrics = get_metrics_collector()
        key = response_cache_key(request)

        cached = await client.get(key)
        if cached is not None:
            try:
                body = orjson.loads(cached)
            except orjson.JSONDecodeError as e:
                raise CacheSerializationError(
                    message=f"Malformed cached response: {e}", details={"key": key}
                ) from e

            metrics.record_http_cache("hit")
            log_stage(logger, Stage.HTTP_READ_THROUGH, "Response served from cache", level="debug", cache_key=key)
            return JSONResponse(content=body, headers={HEADER_CACHE_STATUS: "HIT"})

        response = await call_next(request)
        response.headers[HEADER_CACHE_STATUS] = "MISS"

        if response.status_code != 200:
            metrics.record_http_cache("skipped")
            return response

        raw = b"".join([chunk async for chunk in response.body_iterator])
        rebuilt = Response(
            content=raw,
            status_code=response.status_code,
            headers=dict(response.headers),
        )

        try:
            orjson.loads(raw)
        except orjson.JSONDecodeError:
            # Not a JSON endpoint; pass it through uncached
            metrics.record_http_cache("skipped")
            return rebuilt

        stored = await client.set_ex(key, self.ttl, raw.decode("utf-8"))
        metrics.record_http_cache("stored" if stored else "miss")
        log_stage(
            logger, Stage.HTTP_READ_THROUGH, "Response cache miss", level="debug",
            cache_key=key, stored=stored,
        )
        return rebuilt
