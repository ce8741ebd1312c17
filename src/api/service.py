"""Service layer: runs scrape and fetch operations for the API routes."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from src.api.schemas import (
    FetchRequest,
    FetchResponse,
    ScrapeOptions,
    ScrapeRequest,
    ScrapeResult,
)
from src.cache.redis import ScrapeCache, scrape_key
from src.config import Settings
from src.scrape import InputHandler, ScrapedPage, ScrapeInput, fetch, preview, scrape

logger = logging.getLogger(__name__)


def _to_result(
    task_id: str,
    scrape_input: ScrapeInput,
    page: ScrapedPage,
    ttl: int,
) -> ScrapeResult:
    config = scrape_input.config
    created_at = datetime.now(timezone.utc)
    return ScrapeResult(
        task_id=task_id,
        url=page.url,
        status_code=page.status_code,
        content_type=page.content_type,
        title=page.title,
        meta=page.meta,
        text=page.text,
        links=page.links,
        options=ScrapeOptions(
            allowed_domains=sorted(config.allowed_domains),
            headers=config.headers,
            extract=list(config.extract),
        ),
        created_at=created_at,
        expires_at=created_at + timedelta(seconds=ttl),
    )


async def run_scrape(
    cache: ScrapeCache,
    settings: Settings,
    body: ScrapeRequest,
) -> ScrapeResult:
    """Process, scrape and cache a single URL.

    The task id is a fingerprint of the processed config, so a repeat of
    an unexpired request is answered from the cache without a fetch.
    ScrapeInputError and FetchError propagate to the route.
    """
    handler = InputHandler()
    scrape_input = handler.process_scrape(
        body.url,
        {
            "allowed_domains": body.allowed_domains,
            "headers": body.headers,
            "extract": body.extract,
        },
    )

    task_id = scrape_key(scrape_input.config)
    cached = await cache.get(task_id)
    if cached is not None:
        logger.info("scrape served from cache", extra={"task_id": task_id, "url": body.url})
        return cached.model_copy(update={"cached": True})

    logger.info("scrape started", extra={"task_id": task_id, "url": body.url})

    page = await scrape(
        scrape_input,
        timeout=settings.http_timeout_seconds,
        user_agent=settings.user_agent,
    )
    result = _to_result(task_id, scrape_input, page, settings.result_ttl_seconds)
    await cache.set(task_id, result, ttl=settings.result_ttl_seconds)

    logger.info(
        "scrape completed",
        extra={"task_id": task_id, "url": body.url, "status_code": page.status_code},
    )
    return result


async def fetch_page(settings: Settings, body: FetchRequest) -> FetchResponse:
    """Fetch a URL once and return its body with a short preview."""
    result = await fetch(
        body.url,
        body.headers,
        timeout=settings.http_timeout_seconds,
        user_agent=settings.user_agent,
    )
    return FetchResponse(
        url=result.url,
        status_code=result.status_code,
        content_type=result.content_type,
        length=len(result.text),
        preview=preview(result.text, settings.preview_length),
        text=result.text,
    )


async def get_scrape_result(
    cache: ScrapeCache,
    task_id: str,
) -> ScrapeResult | None:
    """Retrieve a cached scrape result by task_id."""
    return await cache.get(task_id)
