"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api.routes import router
from src.cache.redis import ScrapeCache, create_redis_client
from src.config import get_settings
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting scrape service")

    redis_client = await create_redis_client(settings.redis_url)
    cache = ScrapeCache(redis_client, default_ttl=settings.result_ttl_seconds)

    app.state.settings = settings
    app.state.cache = cache

    logger.info(
        "scrape service ready",
        extra={
            "user_agent": settings.user_agent,
            "http_timeout_seconds": settings.http_timeout_seconds,
            "result_ttl_seconds": settings.result_ttl_seconds,
        },
    )

    yield

    logger.info("shutting down scrape service")
    await redis_client.aclose()


app = FastAPI(title="Scrape Service", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
