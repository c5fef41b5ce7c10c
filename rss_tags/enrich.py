from __future__ import annotations

import concurrent.futures as _fut
from typing import List, Optional, Sequence

from .models import EnrichedItem, FeedItem
from .taggers import Tagger, generate_tags

DEFAULT_CAP = 10


def enrich_items(
    items: Sequence[FeedItem],
    tagger: Tagger,
    *,
    cap: int = DEFAULT_CAP,
    max_workers: Optional[int] = None,
    language: Optional[str] = None,
    max_input_chars: int = 4000,
) -> List[EnrichedItem]:
    """Attach AI tags to the first `cap` items.

    One tag call per item, all running concurrently. `max_workers` of None or 0
    gives every item its own worker; a positive value bounds the pool. Results
    keep the input order regardless of which call finishes first, and every
    retained item comes back exactly once since generate_tags never raises.
    """
    if cap < 1:
        raise ValueError(f"cap must be positive: {cap}")

    selected = list(items)[:cap]
    if not selected:
        return []

    def _one(item: FeedItem) -> EnrichedItem:
        result = generate_tags(
            tagger,
            item.title,
            item.summary,
            language=language,
            max_input_chars=max_input_chars,
        )
        return EnrichedItem(item=item, result=result)

    workers = max_workers if max_workers and max_workers > 0 else len(selected)
    workers = min(workers, len(selected))

    with _fut.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="rss-tags") as ex:
        futures = [ex.submit(_one, it) for it in selected]
        # Indexed by submission, not completion
        return [fu.result() for fu in futures]
