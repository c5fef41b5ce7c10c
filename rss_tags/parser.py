from __future__ import annotations

import html
import re
from typing import Any, Dict, Optional

from .models import FeedItem

_TAG_RE = re.compile(r"<[^>]+>")
_SPACE_RE = re.compile(r"\s+")


def _first_str(entry: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        val = entry.get(key)
        if isinstance(val, str) and val.strip():
            return val.strip()
    return ""


def _content_value(entry: Dict[str, Any]) -> Optional[str]:
    # Atom <content> arrives as a list of {"type", "value"} dicts
    content = entry.get("content")
    if isinstance(content, list) and content:
        c0 = content[0]
        if isinstance(c0, dict):
            value = c0.get("value")
            if isinstance(value, str):
                return value
    return None


def to_snippet(text: str) -> str:
    """Strip markup and collapse whitespace, leaving plain text."""
    if not text:
        return ""
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    return _SPACE_RE.sub(" ", text).strip()


def parse_entry(entry: Dict[str, Any]) -> FeedItem:
    """
    Map a raw feed entry (from feedparser) to a FeedItem.

    Missing fields become empty strings. Title and timestamp are kept as the feed
    wrote them; only the summary is reduced to plain text.
    """
    title = _first_str(entry, "title")
    link = _first_str(entry, "link", "feedburner_origlink")
    published_at = _first_str(entry, "published", "pubdate", "updated", "created")

    summary = _first_str(entry, "summary", "description")
    if not summary:
        summary = _content_value(entry) or ""

    return FeedItem(
        title=title,
        link=link,
        published_at=published_at,
        summary=to_snippet(summary),
    )
