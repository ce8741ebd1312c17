"""HTML field extraction (title, meta, paragraph text, links)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bs4 import BeautifulSoup


def _extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    if tag is None:
        return ""
    return tag.get_text(strip=True)


def _extract_meta(soup: BeautifulSoup) -> dict[str, str]:
    """Map each meta ``name`` or ``property`` to its content.

    The first occurrence of a key wins; charset/http-equiv tags are skipped.
    """
    meta: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        key = tag.get("name") or tag.get("property")
        content = tag.get("content")
        if not key or content is None:
            continue
        meta.setdefault(key.strip().lower(), content.strip())
    return meta


def _extract_text(soup: BeautifulSoup) -> list[str]:
    paragraphs: list[str] = []
    for tag in soup.find_all("p"):
        text = " ".join(tag.get_text().split())
        if text:
            paragraphs.append(text)
    return paragraphs


def _extract_links(soup: BeautifulSoup) -> list[str]:
    # hrefs are kept as written, relative ones included
    return [a["href"] for a in soup.find_all("a", href=True) if a["href"]]


_EXTRACTORS = {
    "title": _extract_title,
    "meta": _extract_meta,
    "text": _extract_text,
    "links": _extract_links,
}


def extract_fields(html: str, fields: Iterable[str]) -> dict[str, Any]:
    """Extract the requested *fields* from *html*.

    Only keys named in *fields* appear in the result. Unknown names raise
    ``KeyError``; callers validate them up front.
    """
    wanted = list(dict.fromkeys(fields))
    if not wanted:
        return {}
    soup = BeautifulSoup(html or "", "html.parser")
    return {name: _EXTRACTORS[name](soup) for name in wanted}
