"""Scrape input processing: turns a URL plus raw options into a ScrapeInput."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import urlparse

from .errors import ScrapeInputError
from .models import EXTRACTABLE_FIELDS, ScrapeConfig, ScrapeInput

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}
_NESTED_KEY = "scrape_config"


def build_config(
    url: str,
    allowed_domains: Iterable[str] = (),
    headers: Mapping[str, str] | None = None,
    extract: Iterable[str] = (),
) -> ScrapeConfig:
    """Construct a ScrapeConfig without validating anything."""
    return ScrapeConfig(
        url=url,
        allowed_domains=frozenset(allowed_domains),
        headers=dict(headers or {}),
        extract=tuple(extract),
    )


def _validate_url(url: Any) -> None:
    if not isinstance(url, str) or not url.strip():
        raise ScrapeInputError("url must be a non-empty string")
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
        _ = parsed.port  # raises on a malformed port
    except ValueError as exc:
        raise ScrapeInputError(f"malformed URL {url!r}: {exc}") from exc
    if parsed.scheme not in _VALID_SCHEMES:
        raise ScrapeInputError(f"unsupported URL scheme for {url!r}: expected http or https")
    if not hostname:
        raise ScrapeInputError(f"URL {url!r} has no host")


def _parse_domains(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ScrapeInputError("allowed_domains must be a list of strings")
    if not all(isinstance(d, str) for d in value):
        raise ScrapeInputError("allowed_domains must contain only strings")
    return list(value)


def _parse_headers(value: Any) -> dict[str, str]:
    if not isinstance(value, Mapping):
        raise ScrapeInputError("headers must be a mapping of strings to strings")
    for key, val in value.items():
        if not isinstance(key, str) or not isinstance(val, str):
            raise ScrapeInputError(f"header {key!r} must map a string to a string")
        if not (key.isascii() and val.isascii()):
            raise ScrapeInputError(f"header {key!r} must contain only ASCII characters")
    return dict(value)


def _parse_extract(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        raise ScrapeInputError("extract must be a list of field names")
    unknown = [f for f in value if f not in EXTRACTABLE_FIELDS]
    if unknown:
        raise ScrapeInputError(
            f"unknown extract field(s) {unknown}; expected any of {list(EXTRACTABLE_FIELDS)}"
        )
    return list(value)


class InputHandler:
    """Collects processed scrape inputs in the order they arrive."""

    def __init__(self) -> None:
        self._inputs: list[ScrapeInput] = []

    def process_scrape(self, url: str, config: Mapping[str, Any] | None = None) -> ScrapeInput:
        """Parse *config* into a ScrapeConfig for *url* and record the input.

        Options are read from ``config["scrape_config"]`` when present,
        otherwise from the top level. A deep copy of the mapping is kept as
        the input's metadata, so later changes by the caller do not leak in.
        Raises ScrapeInputError on a bad URL or option.
        """
        _validate_url(url)
        if config is not None and not isinstance(config, Mapping):
            raise ScrapeInputError("config must be a mapping")
        metadata = copy.deepcopy(dict(config or {}))

        options = metadata.get(_NESTED_KEY)
        if not isinstance(options, Mapping):
            options = metadata

        scrape_config = build_config(
            url,
            allowed_domains=_parse_domains(options.get("allowed_domains", ())),
            headers=_parse_headers(options.get("headers", {})),
            extract=_parse_extract(options.get("extract", ())),
        )
        scrape_input = ScrapeInput(url=url, metadata=metadata, config=scrape_config)
        self._inputs.append(scrape_input)

        logger.debug(
            "scrape input processed",
            extra={
                "url": url,
                "allowed_domains": sorted(scrape_config.allowed_domains),
                "header_count": len(scrape_config.headers),
                "extract": list(scrape_config.extract),
            },
        )
        return scrape_input

    def get_inputs(self) -> list[ScrapeInput]:
        return list(self._inputs)

    def is_scrape_input(self, url: str) -> bool:
        """Return True if *url* has already been processed as a scrape input."""
        return any(item.url == url for item in self._inputs)
