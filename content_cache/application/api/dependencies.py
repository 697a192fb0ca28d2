"""
FastAPI Dependency Injection
============================

Every long-lived component (local cache, orchestrator, shared cache client,
random index, content service) is built ONCE in the application lifespan and
stored on ``app.state``. Route handlers receive them through the providers
below instead of reaching for module-level globals.

    lifespan()                      route handler
    ──────────                      ─────────────
    app.state.orchestrator  ──►     orchestrator: OrchestratorDep
    app.state.content_service ──►   service: ContentServiceDep

Tests get the same wiring by entering ``TestClient(app)`` as a context
manager, which runs the lifespan.
"""

from typing import Annotated

from fastapi import Depends, Request

from content_cache.content.service import ContentService
from content_cache.infrastructure.cache.cache_aside import CacheAsideOrchestrator
from content_cache.infrastructure.cache.shared_cache_client import SharedCacheClient
from content_cache.infrastructure.index.random_index import RandomSelectionIndex


def _require_state(request: Request, name: str):
    if not hasattr(request.app.state, name):
        raise RuntimeError(
            f"{name} not initialized in app.state. "
            "This indicates the application lifespan startup didn't complete properly."
        )
    return getattr(request.app.state, name)


def get_orchestrator(request: Request) -> CacheAsideOrchestrator:
    """The process's single cache-aside orchestrator."""
    return _require_state(request, "orchestrator")


def get_content_service(request: Request) -> ContentService:
    return _require_state(request, "content_service")


def get_random_index(request: Request) -> RandomSelectionIndex:
    return _require_state(request, "random_index")


def get_shared_cache(request: Request) -> SharedCacheClient | None:
    """
    Shared cache client, or None when SHARED_CACHE_ENABLED is false.
    """
    return getattr(request.app.state, "shared_cache", None)


# ============================================================================
# TYPE ALIASES FOR CLEANER ROUTE SIGNATURES
# ============================================================================
# These two are equivalent:
#   async def route(orchestrator: Annotated[CacheAsideOrchestrator, Depends(get_orchestrator)]): ...
#   async def route(orchestrator: OrchestratorDep): ...

OrchestratorDep = Annotated[CacheAsideOrchestrator, Depends(get_orchestrator)]
ContentServiceDep = Annotated[ContentService, Depends(get_content_service)]
RandomIndexDep = Annotated[RandomSelectionIndex, Depends(get_random_index)]
SharedCacheDep = Annotated[SharedCacheClient | None, Depends(get_shared_cache)]
