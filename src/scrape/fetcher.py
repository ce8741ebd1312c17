"""Single-request HTTP fetch."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import urlparse

import httpx

from .errors import FetchError
from .models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0"
PREVIEW_LENGTH = 100


def _check_url(url: str) -> None:
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        _ = parsed.port  # raises on a malformed port
    except ValueError as exc:
        raise FetchError(url, "invalid URL") from exc
    if parsed.scheme not in ("http", "https") or not hostname:
        raise FetchError(url, "invalid URL")


def _build_headers(url: str, user_agent: str, headers: Mapping[str, str] | None) -> httpx.Headers:
    # Case-insensitive merge; header values must be ASCII
    try:
        request_headers = httpx.Headers({"User-Agent": user_agent})
        if headers:
            request_headers.update(headers)
    except (UnicodeEncodeError, TypeError) as exc:
        raise FetchError(url, f"invalid header: {exc}") from exc
    return request_headers


async def fetch(
    url: str,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> FetchResult:
    """GET *url* once and return the response if the status is 200.

    Caller *headers* override the default User-Agent. Any other status, a
    timeout or a transport error raises FetchError; there is no retry.
    """
    _check_url(url)
    request_headers = _build_headers(url, user_agent, headers)

    logger.debug("fetching", extra={"url": url, "timeout": timeout})
    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers=request_headers,
            timeout=timeout,
        ) as client:
            resp = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("fetch timed out", extra={"url": url, "timeout": timeout})
        raise FetchError(url, "timeout") from exc
    except httpx.InvalidURL as exc:
        raise FetchError(url, "invalid URL") from exc
    except httpx.HTTPError as exc:
        logger.warning("fetch failed", extra={"url": url, "error": str(exc)})
        raise FetchError(url, str(exc) or type(exc).__name__) from exc

    if resp.status_code != 200:
        logger.warning("fetch returned non-200 status", extra={"url": url, "status_code": resp.status_code})
        raise FetchError(url, f"status code {resp.status_code}", status_code=resp.status_code)

    text = resp.text
    content_type = resp.headers.get("content-type", "")
    logger.debug(
        "fetched",
        extra={"url": url, "status_code": resp.status_code, "content_type": content_type, "length": len(text)},
    )
    return FetchResult(
        url=url,
        status_code=resp.status_code,
        text=text,
        content_type=content_type,
        final_url=str(resp.url),
    )


async def fetch_data(
    url: str,
    headers: Mapping[str, str] | None = None,
    **kwargs,
) -> str:
    """Return the full response body of *url* as text."""
    result = await fetch(url, headers, **kwargs)
    return result.text


def preview(text: str, length: int = PREVIEW_LENGTH) -> str:
    return text[:length]
