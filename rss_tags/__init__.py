"""
rss_tags

Fetches a category's RSS/Atom feed and tags each of its newest items with five
keywords from a text-generation model (Gemini or OpenAI), served over HTTP.

Pipeline: resolve category → fetch feed → keep newest N → tag concurrently → JSON

Example
-------
from rss_tags import CategoryResolver, NewsPipeline
from rss_tags.config import Settings
from rss_tags.taggers import build_tagger

settings = Settings.from_env()
pipeline = NewsPipeline.from_settings(settings, build_tagger(settings))
category = CategoryResolver.from_file().resolve("tech")

for item in pipeline.run(category).items:
    print(item.item.title, "|", item.tags)
"""
from .models import Category, EnrichedItem, FeedItem, NewsResponse, TagResult, TAG_ERROR_SENTINEL
from .categories import CategoryResolver
from .core import NewsPipeline
from .enrich import enrich_items
from .fetcher import fetch_feed_items
from .taggers import generate_tags

__all__ = [
    "Category",
    "EnrichedItem",
    "FeedItem",
    "NewsResponse",
    "TagResult",
    "TAG_ERROR_SENTINEL",
    "CategoryResolver",
    "NewsPipeline",
    "enrich_items",
    "fetch_feed_items",
    "generate_tags",
]
