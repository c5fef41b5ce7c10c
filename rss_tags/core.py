from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import Settings
from .enrich import DEFAULT_CAP, enrich_items
from .fetcher import fetch_feed_items
from .models import Category, FeedItem, NewsResponse
from .taggers import Tagger

logger = logging.getLogger(__name__)

FetchFn = Callable[..., List[FeedItem]]


@dataclass(frozen=True)
class PipelineOptions:
    limit: int = DEFAULT_CAP
    max_workers: Optional[int] = None
    fetch_timeout_sec: Optional[float] = None
    language: Optional[str] = None
    max_input_chars: int = 4000


class NewsPipeline:
    """
    Fetch a category's feed and tag its newest items.

    Pipeline: fetch → truncate to limit → tag concurrently → NewsResponse
    Fetch failures (RSSFetchError) propagate; tag failures never do.
    """

    def __init__(
        self,
        tagger: Tagger,
        *,
        limit: int = DEFAULT_CAP,
        max_workers: Optional[int] = None,
        fetch_timeout_sec: Optional[float] = None,
        language: Optional[str] = None,
        max_input_chars: int = 4000,
        fetch: FetchFn = fetch_feed_items,
    ) -> None:
        if limit < 1:
            raise ValueError(f"limit must be positive: {limit}")
        self.tagger = tagger
        self.fetch = fetch
        self.options = PipelineOptions(
            limit=limit,
            max_workers=max_workers,
            fetch_timeout_sec=fetch_timeout_sec,
            language=language,
            max_input_chars=max_input_chars,
        )

    @classmethod
    def from_settings(cls, settings: Settings, tagger: Tagger, **kwargs) -> "NewsPipeline":
        return cls(
            tagger,
            limit=settings.news_limit,
            max_workers=settings.max_workers or None,
            fetch_timeout_sec=settings.fetch_timeout_sec,
            language=settings.language,
            max_input_chars=settings.max_input_chars,
            **kwargs,
        )

    def run(self, category: Category) -> NewsResponse:
        items = self.fetch(category.feed_url, timeout_sec=self.options.fetch_timeout_sec)

        enriched = enrich_items(
            items,
            self.tagger,
            cap=self.options.limit,
            max_workers=self.options.max_workers,
            language=self.options.language,
            max_input_chars=self.options.max_input_chars,
        )
        degraded = sum(1 for it in enriched if not it.result.ok)
        if degraded:
            logger.info("%s: %d of %d items fell back to the tag error sentinel",
                        category.key, degraded, len(enriched))
        return NewsResponse(category_name=category.name, items=enriched)
