"""Exceptions raised by the scrape submodule."""

from __future__ import annotations


class ScrapeError(Exception):
    """Base exception for scrape errors."""


class ScrapeInputError(ScrapeError):
    """The URL or options handed to the processing call are unusable."""


class FetchError(ScrapeError):
    """A GET failed, timed out or returned a non-200 status."""

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {message}")
