"""Redis-backed store for scrape results, keyed by a fingerprint of the request."""

from __future__ import annotations

import hashlib
import json
import logging
from urllib.parse import urlsplit

import redis.asyncio as redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from src.api.schemas import ScrapeResult
from src.scrape.models import DEFAULT_EXTRACT, ScrapeConfig

logger = logging.getLogger(__name__)

KEY_PREFIX = "scrape:"
KEY_LENGTH = 16

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_url(url: str) -> str:
    """Normalize *url* so equivalent spellings share a cache entry.

    Lowercases scheme and host, drops the default port and the fragment,
    and turns an empty path into ``/``. Path and query are kept as given.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    netloc = host if port is None or port == _DEFAULT_PORTS.get(scheme) else f"{host}:{port}"
    path = parts.path or "/"
    query = f"?{parts.query}" if parts.query else ""
    return f"{scheme}://{netloc}{path}{query}"


def scrape_key(config: ScrapeConfig) -> str:
    """Deterministic task id for *config*.

    Two configs that would produce the same scrape map to the same key:
    header names compare case-insensitively and an empty extract list
    counts as the default field set.
    """
    payload = {
        "url": normalize_url(config.url),
        "allowed_domains": sorted(d.lower() for d in config.allowed_domains),
        "headers": sorted((k.lower(), v) for k, v in config.headers.items()),
        "extract": sorted(config.extract or DEFAULT_EXTRACT),
    }
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:KEY_LENGTH]


class ScrapeCache:
    """Thin async wrapper around Redis for caching scrape results."""

    def __init__(self, client: redis.Redis, default_ttl: int = 3600) -> None:
        self._client = client
        self._default_ttl = default_ttl

    async def get(self, task_id: str) -> ScrapeResult | None:
        """Return cached result, or ``None`` on miss / error."""
        try:
            raw = await self._client.get(f"{KEY_PREFIX}{task_id}")
            if raw is None:
                logger.debug("cache miss", extra={"task_id": task_id})
                return None
            logger.debug("cache hit", extra={"task_id": task_id})
            return ScrapeResult.model_validate_json(raw)
        except redis.RedisError:
            logger.warning("cache get failed", extra={"task_id": task_id}, exc_info=True)
            return None

    async def set(
        self, task_id: str, result: ScrapeResult, ttl: int | None = None
    ) -> bool:
        """Store *result* with a TTL. Returns ``False`` on error."""
        effective_ttl = ttl if ttl is not None else self._default_ttl
        try:
            await self._client.set(
                f"{KEY_PREFIX}{task_id}",
                result.model_dump_json(),
                ex=effective_ttl,
            )
            logger.debug("cache set", extra={"task_id": task_id, "ttl": effective_ttl})
            return True
        except redis.RedisError:
            logger.warning("cache set failed", extra={"task_id": task_id}, exc_info=True)
            return False


async def create_redis_client(redis_url: str) -> redis.Redis:
    # Credentials stay out of the log line
    safe_url = redis_url.split("@")[-1] if "@" in redis_url else redis_url
    logger.info("connecting to redis", extra={"redis_url": safe_url})
    retry = Retry(ExponentialBackoff(), retries=3)
    return redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
        health_check_interval=30,
        retry=retry,
        retry_on_error=[redis.ConnectionError, redis.TimeoutError],
    )
