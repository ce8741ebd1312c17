"""Request/response Pydantic models."""

from datetime import datetime

from pydantic import BaseModel


class ScrapeRequest(BaseModel):
    url: str
    allowed_domains: list[str] = []
    headers: dict[str, str] = {}
    extract: list[str] = []


class ScrapeOptions(BaseModel):
    allowed_domains: list[str] = []
    headers: dict[str, str] = {}
    extract: list[str] = []


class ScrapeResult(BaseModel):
    task_id: str
    status: str = "completed"
    url: str
    status_code: int = 0
    content_type: str = ""
    title: str = ""
    meta: dict[str, str] = {}
    text: list[str] = []
    links: list[str] = []
    options: ScrapeOptions = ScrapeOptions()
    created_at: datetime
    expires_at: datetime | None = None
    cached: bool = False


class FetchRequest(BaseModel):
    url: str
    headers: dict[str, str] = {}


class FetchResponse(BaseModel):
    url: str
    status_code: int
    content_type: str = ""
    length: int = 0
    preview: str = ""
    text: str = ""
