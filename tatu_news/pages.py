"""
Page Orchestrator - paginate a feed and process its articles concurrently.

At most `concurrency` article pipelines run at once. A failing article
becomes an ArticleFailure in its own slot and never affects its siblings.
Results come back in feed order, not completion order.
"""

import asyncio
import logging
import math

from .article import ArticlePipeline
from .feeds import FeedFetcher
from .models import (
    ArticleFailure,
    ArticleProcessingResult,
    ArticleSuccess,
    ArticleWithEntry,
    FeedEntry,
    PageResult,
)

logger = logging.getLogger(__name__)


def paginate(
    entries: list[FeedEntry], page: int, page_size: int
) -> tuple[list[FeedEntry], int]:
    """Return the entries on a 1-based page and the total page count."""
    if page < 1:
        raise ValueError(f"Page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size must be >= 1, got {page_size}")

    start = (page - 1) * page_size
    total_pages = math.ceil(len(entries) / page_size)
    return entries[start:start + page_size], total_pages


class PageOrchestrator:
    """Builds a render-ready page of feed entries with their articles."""

    def __init__(
        self,
        feeds: FeedFetcher,
        pipeline: ArticlePipeline,
        page_size: int = 10,
        concurrency: int = 3,
    ):
        self.feeds = feeds
        self.pipeline = pipeline
        self.page_size = page_size
        self.concurrency = concurrency

    async def render_page(
        self, feed_url: str, page: int = 1, page_size: int | None = None
    ) -> PageResult:
        """
        Fetch a feed and process the articles on one page.

        page_size defaults to the size the orchestrator was built with.

        Raises:
            FeedError: If the feed itself cannot be fetched
            ValueError: If page < 1
        """
        entries = await self.feeds.fetch(feed_url)
        page_entries, total_pages = paginate(
            entries, page, self.page_size if page_size is None else page_size
        )

        results = await self.process_entries(page_entries)

        logger.info(f"Successfully processed {len(results)} articles on page {page}")
        return PageResult(
            results=results,
            total_items=len(entries),
            total_pages=total_pages,
            current_page=page,
        )

    async def process_entries(self, entries: list[FeedEntry]) -> list[ArticleWithEntry]:
        """Run the pipeline over entries with bounded concurrency, preserving order."""
        if not entries:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)

        async def process_one(entry: FeedEntry) -> ArticleWithEntry:
            async with semaphore:
                result = await self._process_entry(entry)
            return ArticleWithEntry(entry=entry, result=result)

        return list(await asyncio.gather(*(process_one(entry) for entry in entries)))

    async def _process_entry(self, entry: FeedEntry) -> ArticleProcessingResult:
        try:
            summary = await self.pipeline.process(entry.link)
        except Exception as e:
            logger.error(f"Failed to process article {entry.link}: {e}")
            return ArticleFailure(error=str(e) or e.__class__.__name__)
        return ArticleSuccess(data=summary)
