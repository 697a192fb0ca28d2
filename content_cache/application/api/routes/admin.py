"""
Admin Routes
============

Operational endpoints for the caching subsystem.

    DELETE /admin/cache               flush the local cache (stats kept)
    GET    /admin/cache/stats         keys / hits / misses / hitRate
    POST   /admin/cache/stats/reset   zero the hit/miss counters
    DELETE /admin/cache/shared        best-effort Redis invalidation by pattern
    POST   /admin/index/rebuild       reload the random selection index
    GET    /admin/metrics             Prometheus exposition

SECURITY CONSIDERATIONS:
------------------------
In production these should sit behind authentication or on an internal
port. verify_admin_access is the hook for that.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from content_cache.application.api.dependencies import (
    OrchestratorDep,
    RandomIndexDep,
    SharedCacheDep,
)
from content_cache.application.api.models.admin import (
    CacheStats,
    CacheStatsResponse,
    IndexRebuildResponse,
    InvalidationResponse,
    MessageResponse,
)
from content_cache.core.logging.logger import get_logger
from content_cache.infrastructure.monitoring.metrics_collector import get_metrics_collector

logger = get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


async def verify_admin_access() -> None:
    """
    Placeholder for admin authentication.

    Replace with token verification (e.g. fastapi.security.HTTPBearer) and
    raise HTTPException(403) for non-admin callers.
    """


# ============================================================================
# LOCAL CACHE
# ============================================================================


@router.delete(
    "/cache",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    dependencies=[Depends(verify_admin_access)],
)
async def clear_cache(orchestrator: OrchestratorDep):
    """
    Remove every local cache entry.

    Hit/miss counters are NOT reset; use POST /admin/cache/stats/reset.
    """
    orchestrator.clear()
    return MessageResponse(message="Cache cleared successfully")


@router.get(
    "/cache/stats",
    response_model=CacheStatsResponse,
    dependencies=[Depends(verify_admin_access)],
)
async def get_cache_stats(orchestrator: OrchestratorDep):
    stats = orchestrator.stats()
    return CacheStatsResponse(
        stats=CacheStats(
            keys=stats["keys"],
            hits=stats["hits"],
            misses=stats["misses"],
            hit_rate=stats["hit_rate"],
        )
    )


@router.post(
    "/cache/stats/reset",
    response_model=MessageResponse,
    dependencies=[Depends(verify_admin_access)],
)
async def reset_cache_stats(orchestrator: OrchestratorDep):
    orchestrator.reset_stats()
    return MessageResponse(message="Cache statistics reset")


# ============================================================================
# SHARED CACHE
# ============================================================================


@router.delete(
    "/cache/shared",
    response_model=InvalidationResponse,
    dependencies=[Depends(verify_admin_access)],
)
async def invalidate_shared_cache(
    shared_cache: SharedCacheDep,
    pattern: str = Query(..., min_length=1, description="Redis glob pattern, e.g. cache:GET:*"),
):
    """
    Delete shared cache keys matching ``pattern``.

    Returns deleted=0 when the shared cache is disabled or unreachable; the
    call itself never fails because of Redis.
    """
    deleted = 0
    if shared_cache is not None:
        deleted = await shared_cache.invalidate_pattern(pattern)

    logger.info("Shared cache invalidation requested", pattern=pattern, deleted=deleted)
    return InvalidationResponse(pattern=pattern, deleted=deleted)


# ============================================================================
# RANDOM INDEX
# ============================================================================


@router.post(
    "/index/rebuild",
    response_model=IndexRebuildResponse,
    dependencies=[Depends(verify_admin_access)],
)
async def rebuild_index(index: RandomIndexDep):
    """Reload the random selection index from the store (fails soft to size 0)."""
    size = await index.initialize()
    return IndexRebuildResponse(size=size)


# ============================================================================
# METRICS
# ============================================================================


@router.get("/metrics", dependencies=[Depends(verify_admin_access)])
async def get_metrics():
    """Prometheus text exposition for scraping."""
    metrics = get_metrics_collector()
    return Response(
        content=metrics.get_prometheus_metrics(),
        media_type=metrics.get_content_type(),
    )
