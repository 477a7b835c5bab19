"""Link extraction from HTML directory listings."""
from __future__ import annotations

import re
from typing import Callable, List, Optional

from bs4 import BeautifulSoup

FilterMap = Callable[[str], Optional[str]]

_PARENT_RE = re.compile(r"^\.+")


def extract_page_links(content: str, filter_map: FilterMap) -> List[str]:
    """Return ``filter_map(href)`` for every anchor, in document order.

    Anchors whose filter result is None are dropped. No other filtering or
    de-duplication is applied.
    """
    if not content:
        return []
    soup = BeautifulSoup(content, "html.parser")
    result: List[str] = []
    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if not href:
            continue
        mapped = filter_map(href.strip())
        if mapped is not None:
            result.append(mapped)
    return result


def is_parent_link(href: str) -> bool:
    """True for ``../``, ``./`` and other dot-prefixed navigation entries."""
    return bool(_PARENT_RE.match(href))


def _last_segment(href: str) -> str:
    # Absolute hrefs (some servers emit full paths) reduce to their final segment
    trimmed = href.split("?", 1)[0].split("#", 1)[0]
    if trimmed.endswith("/"):
        return trimmed.rstrip("/").rsplit("/", 1)[-1] + "/"
    return trimmed.rsplit("/", 1)[-1]


def directory_label(href: str) -> Optional[str]:
    """Map a subdirectory href to its name; drop files and parent links."""
    if is_parent_link(href):
        return None
    segment = _last_segment(href)
    if not segment.endswith("/") or segment == "/" or is_parent_link(segment):
        return None
    return segment[:-1]


def file_label(href: str) -> Optional[str]:
    """Like directory_label but keeps file entries too."""
    if is_parent_link(href):
        return None
    segment = _last_segment(href)
    if not segment or segment == "/" or is_parent_link(segment):
        return None
    return segment.rstrip("/")
