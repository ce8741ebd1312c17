"""Pydantic Settings: loads configuration from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Empty means the API rejects every request
    api_key: str = ""

    redis_url: str = "redis://localhost:6379"
    result_ttl_seconds: int = 3600

    user_agent: str = "Mozilla/5.0"
    http_timeout_seconds: float = 10.0
    preview_length: int = 100

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
