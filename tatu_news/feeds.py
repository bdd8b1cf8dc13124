"""
Feed Fetcher - Fetch and parse the source RSS feeds.

Handles:
- The two registered sources (Hacker News, The Verge)
- RSS/Atom parsing via feedparser
- Treating an empty feed as an error rather than an empty page
"""

import logging
from dataclasses import dataclass

import feedparser

from .errors import FeedError, HttpError
from .http_client import HttpClient
from .models import FeedEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedSource:
    """A feed the app can render."""
    slug: str
    title: str
    url: str
    path: str


HACKER_NEWS = FeedSource(
    slug="hacker-news",
    title="Hacker News",
    url="https://news.ycombinator.com/rss",
    path="/",
)

THE_VERGE = FeedSource(
    slug="the-verge",
    title="The Verge",
    url="https://www.theverge.com/rss/index.xml",
    path="/the-verge",
)

FEED_SOURCES: dict[str, FeedSource] = {
    source.slug: source for source in (HACKER_NEWS, THE_VERGE)
}


class FeedFetcher:
    """Retrieves a feed and returns its entries in feed order."""

    def __init__(self, http: HttpClient, timeout_ms: int = 30000):
        self.http = http
        self.timeout_ms = timeout_ms

    async def fetch(self, feed_url: str) -> list[FeedEntry]:
        """
        Fetch and parse a feed URL.

        Raises:
            FeedError: If the feed cannot be fetched or parsed, or has no entries
        """
        try:
            content = await self.http.get(feed_url, timeout_ms=self.timeout_ms)
            entries = parse_entries(content, feed_url)
        except HttpError as e:
            logger.error(f"Failed to fetch feed {feed_url}: {e.message}")
            raise FeedError(f"Failed to extract RSS feed '{feed_url}': {e.message}", cause=e) from e
        except FeedError as e:
            logger.error(f"Failed to fetch feed {feed_url}: {e.message}")
            raise

        logger.info(f"Successfully fetched {len(entries)} entries from {feed_url}")
        return entries


def parse_entries(content: str, feed_url: str = "") -> list[FeedEntry]:
    """
    Parse feed content into entries.

    Raises:
        FeedError: If the content is not a feed or has no entries
    """
    parsed = feedparser.parse(content)

    if parsed.bozo and not parsed.entries:
        raise FeedError(f"Failed to parse RSS feed '{feed_url}': {parsed.get('bozo_exception')}")

    if not parsed.entries:
        raise FeedError(f"No entries found in RSS feed '{feed_url}'")

    entries = []
    for entry in parsed.entries:
        link = entry.get("link", "")
        if not link and hasattr(entry, "links"):
            for alt in entry.links:
                if alt.get("rel") == "alternate" or alt.get("type") == "text/html":
                    link = alt.get("href", "")
                    break

        entries.append(FeedEntry(
            title=entry.get("title", "Untitled"),
            link=link,
            comments=entry.get("comments") or link,
        ))

    return entries
