#!/usr/bin/env python3
"""
FastAPI Application Entry Point

Configures the content cache service: lifespan wiring of the cache
components, middleware, routes and exception handlers.

Architecture (built once per process in lifespan, stored on app.state):

    TTLCache ──► CacheAsideOrchestrator ◄── SharedCacheClient (optional tier)
                        │
    ContentStore ──► ContentService ◄── RandomSelectionIndex

Author: System Architect
Date: 2026-10-02
"""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content_cache.application.api.middleware.error_handler import ErrorHandlingMiddleware
from content_cache.application.api.middleware.response_cache import ResponseCacheMiddleware
from content_cache.application.api.routes.admin import router as admin_router
from content_cache.application.api.routes.content import router as content_router
from content_cache.application.api.routes.health import router as health_router
from content_cache.content.responses import error_response
from content_cache.content.service import ContentService
from content_cache.core.config.constants import HEADER_CACHE_STATUS, HEADER_REQUEST_ID
from content_cache.core.config.settings import Settings, get_settings
from content_cache.core.exceptions import ContentCacheError, NotFoundError, StoreError
from content_cache.core.interfaces.store import ContentStore
from content_cache.core.logging.logger import (
    clear_request_id,
    get_logger,
    set_request_id,
    setup_logging,
)
from content_cache.infrastructure.cache.cache_aside import CacheAsideOrchestrator
from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient
from content_cache.infrastructure.cache.ttl_cache import TTLCache
from content_cache.infrastructure.index.random_index import RandomSelectionIndex
from content_cache.infrastructure.monitoring.metrics_collector import get_metrics_collector
from content_cache.infrastructure.store.memory_store import InMemoryContentStore

logger = get_logger(__name__)


# ============================================================================
# Application Lifespan
# ============================================================================


def build_lifespan(store: ContentStore | None = None, shared_cache: SharedCacheClient | None = None):
    """
    Create the lifespan context manager.

    Args:
        store: Primary store; the in-memory sample store when omitted
        shared_cache: Pre-built shared cache client; when omitted one is
            created and connected if SHARED_CACHE_ENABLED is set
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings: Settings = app.state.settings
        cache_settings = settings.cache

        setup_logging(log_level=settings.logging.LOG_LEVEL, log_format=settings.logging.LOG_FORMAT)

        logger.info(
            "Starting Content Cache Service",
            environment=settings.app.ENVIRONMENT,
            version=settings.app.APP_VERSION,
        )

        # Local tier
        local_cache: TTLCache = TTLCache(
            default_ttl=cache_settings.CACHE_DEFAULT_TTL,
            check_period=cache_settings.CACHE_CHECK_PERIOD,
        )
        await local_cache.start()

        # Shared tier (advisory; a failed connect leaves it in degraded mode)
        shared = shared_cache
        if shared is None and settings.redis.SHARED_CACHE_ENABLED:
            shared = SharedCacheClient(settings=settings)
            await shared.connect()

        orchestrator = CacheAsideOrchestrator(
            local_cache,
            shared=shared if cache_settings.CACHE_SHARED_TIER_ENABLED else None,
            single_flight=cache_settings.CACHE_SINGLE_FLIGHT_ENABLED,
        )

        content_store = store if store is not None else InMemoryContentStore.with_sample_data()
        random_index = RandomSelectionIndex(content_store)
        await random_index.initialize()

        app.state.local_cache = local_cache
        app.state.shared_cache = shared
        app.state.orchestrator = orchestrator
        app.state.content_store = content_store
        app.state.random_index = random_index
        app.state.content_service = ContentService(orchestrator, content_store, random_index)

        logger.info(
            "Application startup complete",
            shared_cache_connected=bool(shared and shared.is_connected),
            shared_tier=cache_settings.CACHE_SHARED_TIER_ENABLED,
            index_size=random_index.size,
        )

        try:
            yield
        finally:
            logger.info("Shutting down application")
            await local_cache.stop()
            if shared is not None:
                await shared.disconnect()
            logger.info("Application shutdown complete")

    return lifespan


# ============================================================================
# Exception Handlers
# ============================================================================


async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content=error_response(exc.message))


async def store_error_handler(request: Request, exc: StoreError):
    logger.error(
        f"Store error: {exc.message}",
        error_type=type(exc).__name__,
        path=request.url.path,
        **exc.details,
    )
    get_metrics_collector().record_error(type(exc).__name__, "store")
    return JSONResponse(status_code=500, content=error_response(exc.message))


async def content_cache_error_handler(request: Request, exc: ContentCacheError):
    logger.error(f"Service error: {exc.message}", error_type=type(exc).__name__, path=request.url.path)
    return JSONResponse(status_code=500, content=error_response(exc.message))


async def request_id_middleware(request: Request, call_next):
    """Bind a request ID to the logging context and echo it back."""
    request_id = request.headers.get(HEADER_REQUEST_ID) or str(uuid.uuid4())
    set_request_id(request_id)

    try:
        response = await call_next(request)
        response.headers[HEADER_REQUEST_ID] = request_id
        return response
    finally:
        clear_request_id()


# ============================================================================
# Application Factory
# ============================================================================


def create_app(
    settings: Settings | None = None,
    store: ContentStore | None = None,
    shared_cache: SharedCacheClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (global settings by default)
        store: Primary store implementation
        shared_cache: Shared cache client to use instead of building one

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.APP_NAME,
        version=settings.app.APP_VERSION,
        description="Content API with in-process and Redis response caching",
        lifespan=build_lifespan(store=store, shared_cache=shared_cache),
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # ========================================================================
    # MIDDLEWARE REGISTRATION
    # ========================================================================
    # Starlette runs middleware in REVERSE order of registration, so the
    # last one added is the outermost:
    #   ErrorHandling -> CORS -> RequestID -> ResponseCache -> routes

    base_path = settings.app.API_BASE_PATH

    app.add_middleware(
        ResponseCacheMiddleware,
        ttl=settings.cache.CACHE_RESPONSE_TTL,
        path_prefixes=[f"{base_path}{path}" for path in settings.cache.CACHE_RESPONSE_PATHS],
    )
    app.middleware("http")(request_id_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[HEADER_REQUEST_ID, HEADER_CACHE_STATUS],
    )
    app.add_middleware(
        ErrorHandlingMiddleware,
        include_traceback=(settings.app.ENVIRONMENT == "development"),
    )

    # ========================================================================
    # ROUTER REGISTRATION
    # ========================================================================
    # All API endpoints live under API_BASE_PATH (default: /api/v1):
    # - GET /api/v1/content/industries
    # - GET /api/v1/admin/cache/stats
    # - GET /api/v1/health

    app.include_router(health_router, prefix=base_path)
    app.include_router(content_router, prefix=base_path)
    app.include_router(admin_router, prefix=base_path)

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(ContentCacheError, content_cache_error_handler)

    @app.get("/", tags=["Root"])
    async def root():
        return {
            "name": settings.app.APP_NAME,
            "version": settings.app.APP_VERSION,
            "environment": settings.app.ENVIRONMENT,
            "docs": "/docs",
            "health": f"{base_path}/health",
        }

    return app


# Create application instance
app = create_app()


# ============================================================================
# Main Entry Point
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "content_cache.application.app:app",
        host=settings.app.API_HOST,
        port=settings.app.API_PORT,
        reload=settings.app.ENVIRONMENT == "development",
        log_level=settings.logging.LOG_LEVEL.lower(),
    )
