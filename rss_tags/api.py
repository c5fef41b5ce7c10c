"""
FastAPI app serving tagged news per category.

GET /api/news/{category_key} returns
{"category": <name>, "news": [{"title", "link", "pubDate", "aiTags"}, ...]}
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .categories import CategoryResolver
from .config import Settings
from .core import NewsPipeline
from .exceptions import CategoryNotFound, RSSFetchError
from .taggers import build_tagger

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = "category not found"
FETCH_FAILED = "failed to fetch news"


def create_app(
    settings: Optional[Settings] = None,
    *,
    resolver: Optional[CategoryResolver] = None,
    pipeline: Optional[NewsPipeline] = None,
) -> FastAPI:
    """Build the app. Collaborators not passed in are built from settings."""
    if resolver is None or pipeline is None:
        settings = settings or Settings.from_env()
    if resolver is None:
        resolver = CategoryResolver.from_file(settings.categories_file)
    if pipeline is None:
        pipeline = NewsPipeline.from_settings(settings, build_tagger(settings))

    app = FastAPI(title="RSS Tags", description="News feeds tagged with AI keywords")
    app.state.resolver = resolver
    app.state.pipeline = pipeline

    @app.exception_handler(CategoryNotFound)
    async def category_not_found_handler(request: Request, exc: CategoryNotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": CATEGORY_NOT_FOUND})

    @app.exception_handler(RSSFetchError)
    async def fetch_error_handler(request: Request, exc: RSSFetchError) -> JSONResponse:
        logger.error("RSS fetch failed for %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=500, content={"error": FETCH_FAILED})

    @app.get("/api/categories")
    def list_categories(request: Request):
        resolver = request.app.state.resolver
        return {
            "categories": [
                {"key": key, "name": resolver.resolve(key).name} for key in resolver.keys()
            ]
        }

    @app.get("/api/news/{category_key}")
    def get_news(category_key: str, request: Request):
        """Fetch the category's feed and tag its newest items."""
        category = request.app.state.resolver.resolve(category_key)
        response = request.app.state.pipeline.run(category)
        return response.to_dict()

    # Mounted last so it never shadows the API routes
    static_dir = settings.static_dir if settings else "public"
    if static_dir and os.path.isdir(static_dir):
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app
