from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Mapping, Optional

from .config import ConfigurationError
from .exceptions import CategoryNotFound
from .models import Category

DEFAULT_CATEGORIES_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "categories.json")


def load_categories(path: Optional[str] = None) -> Dict[str, Category]:
    """
    Load the category table from a JSON file.

    Expected shape: {"<key>": {"name": "<display name>", "url": "<feed url>"}, ...}
    Raises ConfigurationError when the file is missing or malformed.
    """
    path = path or DEFAULT_CATEGORIES_FILE
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot load categories from {path} ({e})") from e
    return categories_from_mapping(raw, source=path)


def categories_from_mapping(raw: Any, *, source: str = "<mapping>") -> Dict[str, Category]:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Category table must be a JSON object: {source}")

    table: Dict[str, Category] = {}
    for key, entry in raw.items():
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Category {key!r} must be an object: {source}")
        name = entry.get("name")
        url = entry.get("url")
        if not isinstance(name, str) or not name.strip():
            raise ConfigurationError(f"Category {key!r} lacks a name: {source}")
        if not isinstance(url, str) or not url.strip():
            raise ConfigurationError(f"Category {key!r} lacks a feed url: {source}")
        table[key] = Category(key=key, name=name.strip(), feed_url=url.strip())
    return table


class CategoryResolver:
    """Static lookup from category key to display name and feed URL."""

    def __init__(self, categories: Mapping[str, Category]) -> None:
        self._categories = dict(categories)

    @classmethod
    def from_file(cls, path: Optional[str] = None) -> "CategoryResolver":
        return cls(load_categories(path))

    def resolve(self, key: str) -> Category:
        category = self._categories.get(key)
        if category is None:
            raise CategoryNotFound(key)
        return category

    def keys(self) -> List[str]:
        return list(self._categories)

    def __len__(self) -> int:
        return len(self._categories)
