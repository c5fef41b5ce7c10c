import threading
import time

import pytest

from rss_tags.models import Category, FeedItem


RSS_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Sample feed</title>
    <link>https://example.com/</link>
    <description>Sample</description>
{items}
  </channel>
</rss>
"""

RSS_ITEM = """    <item>
      <title>Story {n}</title>
      <link>https://example.com/story/{n}</link>
      <pubDate>Mon, 06 Oct 2025 0{h}:00:00 +0900</pubDate>
      <description>&lt;p&gt;Summary of story {n}&lt;/p&gt;</description>
    </item>"""


def make_rss(count: int) -> bytes:
    items = "\n".join(RSS_ITEM.format(n=n, h=n % 10) for n in range(1, count + 1))
    return RSS_TEMPLATE.format(items=items).encode("utf-8")


def make_items(count: int):
    return [
        FeedItem(
            title=f"Story {n}",
            link=f"https://example.com/story/{n}",
            published_at=f"Mon, 06 Oct 2025 0{n % 10}:00:00 +0900",
            summary=f"Summary of story {n}",
        )
        for n in range(1, count + 1)
    ]


class FakeTagger:
    """Answers from the prompt's title; can fail or stall for chosen titles."""

    def __init__(self, *, fail_on=(), delays=None):
        self.fail_on = set(fail_on)
        self.delays = delays or {}
        self.prompts = []
        self._lock = threading.Lock()

    def generate(self, *, prompt: str) -> str:
        with self._lock:
            self.prompts.append(prompt)
        title = ""
        for line in prompt.splitlines():
            if line.startswith("Title: "):
                title = line[len("Title: "):]
        delay = self.delays.get(title)
        if delay:
            time.sleep(delay)
        if title in self.fail_on:
            raise ConnectionError(f"upstream unavailable for {title}")
        return f"  {title}, news, a, b, c\n"


@pytest.fixture
def fake_tagger():
    return FakeTagger()


@pytest.fixture
def tech_category():
    return Category(key="tech", name="Technology", feed_url="https://example.com/rss.xml")
