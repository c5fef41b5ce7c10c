from __future__ import annotations

import logging
from typing import List, Optional

import feedparser
import requests

from .exceptions import RSSFetchError
from .models import FeedItem
from .parser import parse_entry

logger = logging.getLogger(__name__)

USER_AGENT = "rss-tags/0.1 (+https://github.com/)"


def download_feed(url: str, timeout_sec: Optional[float] = None) -> bytes:
    """
    Download a feed document with a single attempt.

    Raises RSSFetchError on network errors and non-2xx responses.
    """
    try:
        resp = requests.get(url, timeout=timeout_sec, headers={"User-Agent": USER_AGENT})
        resp.raise_for_status()
    except requests.RequestException as e:
        raise RSSFetchError(f"Failed to fetch feed: {url} ({e})") from e
    return resp.content


def parse_feed(content: bytes, url: str = "<memory>") -> List[FeedItem]:
    """
    Parse a feed document into FeedItems, keeping the feed's order.

    Raises RSSFetchError when the document is malformed (bozo) or has no entries list.
    """
    feed = feedparser.parse(content)

    if getattr(feed, "bozo", 0):
        exc = getattr(feed, "bozo_exception", None)
        # Declared/actual encoding mismatch is recoverable
        if not isinstance(exc, feedparser.CharacterEncodingOverride):
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise RSSFetchError(msg)

    entries = getattr(feed, "entries", None)
    if not isinstance(entries, list):
        raise RSSFetchError(f"Feed has no entries: {url}")
    return [parse_entry(e) for e in entries]


def fetch_feed_items(url: str, timeout_sec: Optional[float] = None) -> List[FeedItem]:
    """Fetch a single feed URL and return its items. Every call re-fetches."""
    content = download_feed(url, timeout_sec=timeout_sec)
    items = parse_feed(content, url=url)
    logger.debug("Fetched %d items from %s", len(items), url)
    return items
