"""Data models for the scrape submodule."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

EXTRACTABLE_FIELDS: tuple[str, ...] = ("title", "meta", "text", "links")

# Used when a config requests no fields
DEFAULT_EXTRACT: tuple[str, ...] = ("title", "text", "links")


@dataclass(frozen=True)
class ScrapeConfig:
    """Options describing a single scrape request.

    Built once per invocation and never mutated. Nothing here checks that
    ``url`` belongs to ``allowed_domains``.
    """

    url: str
    allowed_domains: frozenset[str] = frozenset()
    headers: dict[str, str] = field(default_factory=dict)
    extract: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScrapeInput:
    """A processed scrape request: the URL, the raw options and the parsed config."""

    url: str
    metadata: dict[str, Any]
    config: ScrapeConfig


@dataclass
class FetchResult:
    """Outcome of one successful GET."""

    url: str
    status_code: int
    text: str
    content_type: str = ""
    final_url: str = ""

    @property
    def is_html(self) -> bool:
        return "html" in self.content_type.lower()


@dataclass
class ScrapedPage:
    """Fields extracted from a single scraped web page."""

    url: str
    status_code: int = 0
    content_type: str = ""
    title: str = ""
    meta: dict[str, str] = field(default_factory=dict)
    text: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
