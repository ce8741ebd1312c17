"""POST /scrape, GET /scrape/{id}, POST /fetch endpoint handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from src.api import service
from src.api.schemas import FetchRequest, FetchResponse, ScrapeRequest, ScrapeResult
from src.auth.dependencies import require_api_key
from src.cache.redis import ScrapeCache
from src.config import Settings
from src.scrape import FetchError, ScrapeInputError

router = APIRouter(dependencies=[Depends(require_api_key)])


def _get_cache(request: Request) -> ScrapeCache:
    return request.app.state.cache


def _get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _bad_gateway(exc: FetchError) -> HTTPException:
    return HTTPException(
        status_code=502,
        detail={"message": str(exc), "upstream_status": exc.status_code},
    )


@router.post("/scrape", response_model=ScrapeResult)
async def create_scrape(
    body: ScrapeRequest,
    cache: ScrapeCache = Depends(_get_cache),
    settings: Settings = Depends(_get_settings),
):
    try:
        return await service.run_scrape(cache, settings, body)
    except ScrapeInputError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except FetchError as exc:
        raise _bad_gateway(exc) from exc


@router.get("/scrape/{task_id}", response_model=ScrapeResult)
async def get_scrape(
    task_id: str,
    cache: ScrapeCache = Depends(_get_cache),
):
    result = await service.get_scrape_result(cache, task_id)
    if result is None:
        raise HTTPException(status_code=404, detail="Result not found or expired")
    return result


@router.post("/fetch", response_model=FetchResponse)
async def fetch_url(
    body: FetchRequest,
    settings: Settings = Depends(_get_settings),
):
    try:
        return await service.fetch_page(settings, body)
    except FetchError as exc:
        raise _bad_gateway(exc) from exc
