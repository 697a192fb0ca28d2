"""
Health Check Routes
===================

KUBERNETES HEALTH PROBES:
-------------------------
- GET /health/live   "Is the process running?"     never checks dependencies
- GET /health/ready  "Can it serve traffic?"       503 until lifespan wiring exists
- GET /health        component report, always 200

Redis is deliberately NOT a readiness requirement: the shared cache is
advisory, so an instance with Redis down still serves every request (only
slower). Its state is reported as "unavailable" in the component report.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from content_cache.application.api.dependencies import SharedCacheDep

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    status: str  # "healthy" or "degraded"
    timestamp: str  # ISO 8601
    components: dict | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("", response_model=HealthResponse)
async def health_check(request: Request, shared_cache: SharedCacheDep):
    """
    Component report: local cache size, random index size, shared cache
    connectivity. "degraded" means Redis is enabled but unreachable.
    """
    state = request.app.state
    components: dict = {}

    orchestrator = getattr(state, "orchestrator", None)
    if orchestrator is not None:
        components["local_cache"] = {"status": "healthy", "keys": orchestrator.stats()["keys"]}

    index = getattr(state, "random_index", None)
    if index is not None:
        components["random_index"] = {"status": "healthy", "size": index.size}

    if shared_cache is None:
        components["shared_cache"] = {"status": "disabled"}
    else:
        components["shared_cache"] = await shared_cache.health_check()

    status = "healthy"
    if components["shared_cache"]["status"] == "unavailable":
        status = "degraded"

    return HealthResponse(status=status, timestamp=_now(), components=components)


@router.get("/live")
async def liveness_probe():
    return {"status": "alive", "timestamp": _now()}


@router.get("/ready")
async def readiness_probe(request: Request):
    """
    Raises:
        HTTPException: 503 if startup wiring has not completed
    """
    ready = hasattr(request.app.state, "content_service")
    result = {"status": "ready" if ready else "not_ready", "timestamp": _now()}
    if not ready:
        raise HTTPException(status_code=503, detail=result)
    return result
