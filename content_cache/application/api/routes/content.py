"""
Content Routes
==============

Read endpoints over the primary store, each answered through the cache-aside
orchestrator. ``language`` is validated against the Locale enum, so an
unsupported value is rejected with 422 before any cache or store work.

    GET /content/industries                  cached 1h (industries:all)
    GET /content/levels                      cached 1h
    GET /content/flashcards                  cached 5m
    GET /content/flashcards/random           index pick, not cached
    GET /content/flashcards/{flashcard_id}   cached 5m
"""

from fastapi import APIRouter, Query, Request

from content_cache.application.api.dependencies import ContentServiceDep, OrchestratorDep
from content_cache.content.locale import Locale
from content_cache.content.service import INDUSTRIES_CACHE_KEY
from content_cache.core.config.constants import TTL_INDUSTRIES

router = APIRouter(prefix="/content", tags=["Content"])


@router.get("/industries")
async def list_industries(
    request: Request, orchestrator: OrchestratorDep, service: ContentServiceDep
):
    return await orchestrator.handle_with_cache(
        request, INDUSTRIES_CACHE_KEY, service.fetch_industries, ttl=TTL_INDUSTRIES
    )


@router.get("/levels")
async def list_levels(
    service: ContentServiceDep,
    industry_id: int | None = Query(None, ge=1),
    language: Locale = Query(Locale.ENGLISH, description="Translation to include besides English"),
):
    return await service.list_levels(industry_id=industry_id, language=language)


@router.get("/flashcards")
async def list_flashcards(
    service: ContentServiceDep,
    level_id: int | None = Query(None, ge=1),
    industry_id: int | None = Query(None, ge=1),
    language: Locale = Query(Locale.ENGLISH, description="Translation to include besides English"),
):
    return await service.list_flashcards(
        level_id=level_id, industry_id=industry_id, language=language
    )


# Declared before /flashcards/{flashcard_id} so "random" is not read as an id
@router.get("/flashcards/random")
async def random_flashcard(
    service: ContentServiceDep,
    level_id: int | None = Query(None, ge=1),
    industry_id: int | None = Query(None, ge=1),
    language: Locale = Query(Locale.ENGLISH, description="Translation to include besides English"),
):
    return await service.random_flashcard(
        level_id=level_id, industry_id=industry_id, language=language
    )


@router.get("/flashcards/{flashcard_id}")
async def get_flashcard(
    flashcard_id: str,
    service: ContentServiceDep,
    language: Locale = Query(Locale.ENGLISH, description="Translation to include besides English"),
):
    return await service.get_flashcard(flashcard_id, language=language)
