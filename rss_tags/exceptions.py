class RSSFetchError(Exception):
    """Raised when an RSS/Atom feed cannot be fetched or parsed."""


class CategoryNotFound(Exception):
    """Raised when a category key is not in the configured table."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown category: {key}")
        self.key = key


class TagGenerationError(Exception):
    """Raised by a tagger when the generation service returns nothing usable."""
