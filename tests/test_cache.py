"""Redis cache tests."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from src.api.schemas import ScrapeOptions, ScrapeResult
from src.cache.redis import KEY_PREFIX, ScrapeCache


pytestmark = pytest.mark.asyncio


def _make_result(task_id: str = "task-1", **overrides) -> ScrapeResult:
    defaults = dict(
        task_id=task_id,
        url="http://example.com",
        status_code=200,
        content_type="text/html",
        title="Example Domain",
        meta={"description": "Demo"},
        text=["One.", "Two."],
        links=["https://www.iana.org/"],
        options=ScrapeOptions(
            allowed_domains=["example.com"],
            headers={"User-Agent": "Mozilla/5.0"},
            extract=["title", "meta"],
        ),
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )
    defaults.update(overrides)
    return ScrapeResult(**defaults)


async def test_set_and_get(scrape_cache: ScrapeCache):
    result = _make_result()
    assert await scrape_cache.set("task-1", result) is True
    cached = await scrape_cache.get("task-1")
    assert cached == result


async def test_get_missing_key(scrape_cache: ScrapeCache):
    assert await scrape_cache.get("nonexistent") is None


async def test_ttl_is_set(scrape_cache: ScrapeCache):
    await scrape_cache.set("task-ttl", _make_result("task-ttl"))
    ttl = await scrape_cache._client.ttl(f"{KEY_PREFIX}task-ttl")
    assert 0 < ttl <= 3600


async def test_custom_ttl(scrape_cache: ScrapeCache):
    await scrape_cache.set("task-custom", _make_result("task-custom"), ttl=120)
    ttl = await scrape_cache._client.ttl(f"{KEY_PREFIX}task-custom")
    assert 0 < ttl <= 120


async def test_key_prefix(scrape_cache: ScrapeCache):
    await scrape_cache.set("abc-123", _make_result("abc-123"))
    assert await scrape_cache._client.exists(f"{KEY_PREFIX}abc-123")
    assert not await scrape_cache._client.exists("abc-123")


async def test_options_round_trip(scrape_cache: ScrapeCache):
    await scrape_cache.set("task-opts", _make_result("task-opts"))
    cached = await scrape_cache.get("task-opts")
    assert cached.options.allowed_domains == ["example.com"]
    assert cached.options.headers == {"User-Agent": "Mozilla/5.0"}
    assert cached.options.extract == ["title", "meta"]
    assert cached.meta == {"description": "Demo"}


async def test_minimal_json_defaults(scrape_cache: ScrapeCache):
    """JSON with only the required keys deserializes with empty fields."""
    import json

    minimal = json.dumps({
        "task_id": "task-min",
        "url": "http://example.com",
        "created_at": "2026-01-01T00:00:00Z",
    })
    await scrape_cache._client.set(f"{KEY_PREFIX}task-min", minimal, ex=3600)
    cached = await scrape_cache.get("task-min")
    assert cached is not None
    assert cached.status == "completed"
    assert cached.text == []
    assert cached.options.extract == []


async def test_get_handles_connection_error(scrape_cache: ScrapeCache):
    scrape_cache._client.get = AsyncMock(
        side_effect=redis.ConnectionError("down")
    )
    assert await scrape_cache.get("task-err") is None


async def test_set_handles_connection_error(scrape_cache: ScrapeCache):
    scrape_cache._client.set = AsyncMock(
        side_effect=redis.ConnectionError("down")
    )
    assert await scrape_cache.set("task-err", _make_result()) is False
