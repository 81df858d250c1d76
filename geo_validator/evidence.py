"""Helpers that pick a small HTML excerpt to show next to a failing check."""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

# Hard cap on evidence length, ellipsis included.
MAX_EVIDENCE_CHARS = 200
ELLIPSIS = "..."


def truncate(text: str, limit: int = MAX_EVIDENCE_CHARS) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def markup_of(node: Tag | BeautifulSoup | None) -> str | None:
    if node is None:
        return None
    return truncate(str(node)) or None


def body_excerpt(soup: BeautifulSoup) -> str | None:
    return markup_of(soup.body or soup)


def head_excerpt(soup: BeautifulSoup) -> str | None:
    return markup_of(soup.head)


def script_excerpt(script: Tag | None) -> str | None:
    if script is None:
        return None
    return truncate(script.string or script.get_text() or "") or None
