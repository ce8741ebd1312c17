"""Web scraping submodule: input processing, fetching and field extraction."""

from __future__ import annotations

import logging

from .errors import FetchError, ScrapeError, ScrapeInputError
from .extractor import extract_fields
from .fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, fetch, fetch_data, preview
from .input_handler import InputHandler, build_config
from .models import (
    DEFAULT_EXTRACT,
    EXTRACTABLE_FIELDS,
    FetchResult,
    ScrapeConfig,
    ScrapedPage,
    ScrapeInput,
)

__all__ = [
    "DEFAULT_EXTRACT",
    "EXTRACTABLE_FIELDS",
    "FetchError",
    "FetchResult",
    "InputHandler",
    "ScrapeConfig",
    "ScrapeError",
    "ScrapeInput",
    "ScrapeInputError",
    "ScrapedPage",
    "build_config",
    "extract_fields",
    "fetch",
    "fetch_data",
    "format_scraped_content",
    "preview",
    "scrape",
]

logger = logging.getLogger(__name__)


async def scrape(
    scrape_input: ScrapeInput,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> ScrapedPage:
    """Fetch a processed input and extract its configured fields.

    Non-HTML responses yield a page with only status and content type set.
    FetchError propagates to the caller.
    """
    config = scrape_input.config
    fields = config.extract or DEFAULT_EXTRACT

    result = await fetch(
        scrape_input.url,
        config.headers,
        timeout=timeout,
        user_agent=user_agent,
    )
    page = ScrapedPage(
        url=scrape_input.url,
        status_code=result.status_code,
        content_type=result.content_type,
    )

    if result.content_type and not result.is_html:
        logger.debug(
            "non-html response, nothing extracted",
            extra={"url": scrape_input.url, "content_type": result.content_type},
        )
        return page

    for name, value in extract_fields(result.text, fields).items():
        setattr(page, name, value)

    logger.debug(
        "scrape complete",
        extra={
            "url": scrape_input.url,
            "fields": list(fields),
            "paragraphs": len(page.text),
            "links": len(page.links),
        },
    )
    return page


def format_scraped_content(page: ScrapedPage) -> str:
    """Render a scraped page as a plain-text block."""
    text = "\n".join(page.text)
    links = "\n".join(page.links)
    return f"Title: {page.title}\n\nText Content:\n{text}\n\nLinks:\n{links}"
