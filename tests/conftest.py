"""Shared fixtures for Redis and httpx stubs."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from fakeredis.aioredis import FakeRedis

from src.cache.redis import ScrapeCache


@pytest_asyncio.fixture
async def scrape_cache():
    """ScrapeCache backed by an in-memory FakeRedis instance."""
    client = FakeRedis(decode_responses=True)
    cache = ScrapeCache(client, default_ttl=3600)
    yield cache
    await client.aclose()


def _make_response(
    status_code: int = 200,
    text: str = "",
    content_type: str = "text/html; charset=utf-8",
    url: str = "http://example.com",
) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.headers = {"content-type": content_type}
    response.url = url
    return response


@pytest.fixture
def make_response():
    """Factory for stubbed httpx responses."""
    return _make_response


@pytest.fixture
def mock_http():
    """Patch httpx.AsyncClient in the fetcher; yields (client_cls, ctx).

    Set ``ctx.get.return_value`` or ``ctx.get.side_effect`` in the test.
    """
    with patch("src.scrape.fetcher.httpx.AsyncClient") as mock_client:
        ctx = AsyncMock()
        mock_client.return_value.__aenter__ = AsyncMock(return_value=ctx)
        mock_client.return_value.__aexit__ = AsyncMock(return_value=False)
        yield mock_client, ctx
