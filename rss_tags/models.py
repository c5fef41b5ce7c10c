from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

TAG_ERROR_SENTINEL = "AI tag generation error"


@dataclass(frozen=True)
class Category:
    key: str
    name: str
    feed_url: str


@dataclass(frozen=True)
class FeedItem:
    """
    A single feed entry as handed to the client.

    `published_at` keeps the feed's own timestamp string untouched.
    """
    title: str
    link: str
    published_at: str = ""
    summary: str = ""


@dataclass(frozen=True)
class TagResult:
    """
    Outcome of one tag generation call.

    A degraded result carries the sentinel as its tags and the failure cause in
    `reason`. Only `tags` ever reaches the client.
    """
    tags: str
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    @classmethod
    def success(cls, tags: str) -> "TagResult":
        return cls(tags=tags)

    @classmethod
    def degraded(cls, reason: str) -> "TagResult":
        return cls(tags=TAG_ERROR_SENTINEL, reason=reason or "unknown error")


@dataclass(frozen=True)
class EnrichedItem:
    item: FeedItem
    result: TagResult

    @property
    def tags(self) -> str:
        return self.result.tags

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.item.title,
            "link": self.item.link,
            "pubDate": self.item.published_at,
            "aiTags": self.result.tags,
        }


@dataclass(frozen=True)
class NewsResponse:
    category_name: str
    items: List[EnrichedItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category_name,
            "news": [it.to_dict() for it in self.items],
        }
