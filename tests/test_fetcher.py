"""
Tests for rss_tags.fetcher and rss_tags.parser

No network: requests.get is patched and feeds are parsed from memory.
"""
from unittest.mock import MagicMock, patch

import feedparser
import pytest
import requests

from conftest import RSS_TEMPLATE, make_rss
from rss_tags.exceptions import RSSFetchError
from rss_tags.fetcher import fetch_feed_items, parse_feed
from rss_tags.parser import parse_entry, to_snippet


ATOM = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom sample</title>
  <id>urn:example</id>
  <updated>2025-10-06T09:00:00Z</updated>
  <entry>
    <title>Atom story</title>
    <link href="https://example.com/atom/1"/>
    <id>urn:example:1</id>
    <updated>2025-10-06T09:00:00Z</updated>
    <content type="html">&lt;b&gt;Bold&lt;/b&gt; content &amp;amp; more</content>
  </entry>
</feed>
"""


def _response(content=b"", status=200):
    resp = MagicMock()
    resp.content = content
    resp.status_code = status
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return resp


class TestParseFeed:
    def test_rss_fields_and_order(self):
        items = parse_feed(make_rss(3))

        assert [it.title for it in items] == ["Story 1", "Story 2", "Story 3"]
        first = items[0]
        assert first.link == "https://example.com/story/1"
        assert first.published_at == "Mon, 06 Oct 2025 01:00:00 +0900"
        assert first.summary == "Summary of story 1"

    def test_atom_uses_updated_and_content(self):
        items = parse_feed(ATOM)

        assert len(items) == 1
        assert items[0].link == "https://example.com/atom/1"
        assert items[0].published_at == "2025-10-06T09:00:00Z"
        assert items[0].summary == "Bold content & more"

    def test_malformed_document_raises(self):
        with pytest.raises(RSSFetchError):
            parse_feed(b"<rss><channel><item><title>broken</title></channel>")

    def test_empty_channel_yields_no_items(self):
        assert parse_feed(make_rss(0)) == []

    def test_titles_keep_escaped_angle_brackets(self):
        doc = RSS_TEMPLATE.format(items="\n".join([
            "<item><title>Vector&lt;int&gt; explained</title><link>https://example.com/v</link></item>",
            "<item><title>Price &lt; 5 and &gt; 3</title><link>https://example.com/p</link></item>",
        ])).encode("utf-8")

        items = parse_feed(doc)

        assert [it.title for it in items] == ["Vector<int> explained", "Price < 5 and > 3"]

    def test_encoding_override_is_accepted(self):
        # Declared UTF-8, but the title byte is Latin-1
        doc = make_rss(1).replace(b"<title>Story 1</title>", b"<title>Caf\xe9 news</title>")
        assert isinstance(feedparser.parse(doc).bozo_exception, feedparser.CharacterEncodingOverride)

        items = parse_feed(doc)

        assert len(items) == 1
        assert items[0].link == "https://example.com/story/1"
        assert items[0].title.endswith(" news")


class TestParseEntry:
    def test_missing_fields_default_to_empty(self):
        item = parse_entry({})
        assert item.title == ""
        assert item.link == ""
        assert item.published_at == ""
        assert item.summary == ""

    def test_link_falls_back_to_origlink(self):
        item = parse_entry({"title": "t", "feedburner_origlink": "https://example.com/o"})
        assert item.link == "https://example.com/o"

    def test_snippet_strips_markup(self):
        assert to_snippet("<p>Fish &amp; <a href='x'>chips</a></p>\n\n") == "Fish & chips"


class TestFetchFeedItems:
    def test_fetches_and_parses(self):
        with patch("rss_tags.fetcher.requests.get", return_value=_response(make_rss(2))) as get:
            items = fetch_feed_items("https://example.com/rss.xml", timeout_sec=5)

        assert [it.title for it in items] == ["Story 1", "Story 2"]
        args, kwargs = get.call_args
        assert args[0] == "https://example.com/rss.xml"
        assert kwargs["timeout"] == 5

    def test_bad_status_raises(self):
        with patch("rss_tags.fetcher.requests.get", return_value=_response(status=503)):
            with pytest.raises(RSSFetchError):
                fetch_feed_items("https://example.com/rss.xml")

    def test_network_error_raises(self):
        with patch("rss_tags.fetcher.requests.get", side_effect=requests.ConnectionError("refused")):
            with pytest.raises(RSSFetchError) as exc_info:
                fetch_feed_items("https://example.com/rss.xml")
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_refetches_every_call(self):
        with patch("rss_tags.fetcher.requests.get", return_value=_response(make_rss(1))) as get:
            fetch_feed_items("https://example.com/rss.xml")
            fetch_feed_items("https://example.com/rss.xml")
        assert get.call_count == 2
