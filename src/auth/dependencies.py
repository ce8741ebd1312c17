"""API key validation (FastAPI dependency)."""

import hmac
import logging

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from src.config import Settings, get_settings

logger = logging.getLogger(__name__)

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _reject() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid API key",
    )


async def require_api_key(
    api_key: str | None = Security(_api_key_header),
    settings: Settings = Depends(get_settings),
) -> str:
    """Check the X-API-Key header against API_KEY.

    With no API_KEY configured every request is refused.
    """
    if not settings.api_key:
        logger.warning("API_KEY not configured, rejecting request")
        raise _reject()
    if not api_key or not hmac.compare_digest(api_key, settings.api_key):
        raise _reject()
    return api_key
