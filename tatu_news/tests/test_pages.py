"""
Tests for pagination and bounded concurrent article processing.
"""

import asyncio

import pytest

from tatu_news.errors import ArticleError, FeedError, HttpError
from tatu_news.feeds import FeedFetcher
from tatu_news.models import ArticleFailure, ArticleSuccess, ArticleSummary, FeedEntry
from tatu_news.pages import PageOrchestrator, paginate

from .samples import make_rss

FEED_URL = "https://news.example.com/rss"


def make_entries(count: int) -> list[FeedEntry]:
    return [
        FeedEntry(f"Story {i}", f"https://a.example/{i}", f"https://a.example/{i}")
        for i in range(1, count + 1)
    ]


class FakePipeline:
    """Pipeline stand-in that tracks how many calls run at once."""

    def __init__(self, delays: dict[str, float] | None = None, errors: dict[str, Exception] | None = None):
        self.delays = delays or {}
        self.errors = errors or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def process(self, url: str) -> ArticleSummary:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0.01))
            if url in self.errors:
                raise self.errors[url]
            return ArticleSummary(article=f"<p>{url}</p>", summary="Summary unavailable.")
        finally:
            self.in_flight -= 1


def make_orchestrator(fake_http, entries, pipeline=None, page_size=10, concurrency=3):
    fake_http.responses[FEED_URL] = make_rss([(e.title, e.link, e.comments) for e in entries])
    return PageOrchestrator(
        feeds=FeedFetcher(fake_http),
        pipeline=pipeline or FakePipeline(),
        page_size=page_size,
        concurrency=concurrency,
    )


class TestPaginate:
    def test_pages(self):
        entries = make_entries(25)

        assert paginate(entries, 1, 10) == (entries[0:10], 3)
        assert paginate(entries, 3, 10) == (entries[20:25], 3)
        assert paginate(entries, 4, 10) == ([], 3)

    def test_exact_multiple(self):
        assert paginate(make_entries(20), 2, 10)[1] == 2

    def test_invalid_page(self):
        with pytest.raises(ValueError):
            paginate(make_entries(5), 0, 10)

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            paginate(make_entries(5), 1, 0)


class TestRenderPage:
    """Tests for PageOrchestrator.render_page()."""

    @pytest.mark.asyncio
    async def test_first_page(self, fake_http):
        pipeline = FakePipeline()
        orchestrator = make_orchestrator(fake_http, make_entries(25), pipeline)

        page = await orchestrator.render_page(FEED_URL, 1)

        assert len(page.results) == 10
        assert page.total_items == 25
        assert page.total_pages == 3
        assert page.current_page == 1
        assert not page.has_previous
        assert page.has_next
        assert pipeline.calls == [f"https://a.example/{i}" for i in range(1, 11)]

    @pytest.mark.asyncio
    async def test_last_partial_page(self, fake_http):
        orchestrator = make_orchestrator(fake_http, make_entries(25))

        page = await orchestrator.render_page(FEED_URL, 3)

        assert [r.entry.title for r in page.results] == [f"Story {i}" for i in range(21, 26)]
        assert page.has_previous
        assert not page.has_next

    @pytest.mark.asyncio
    async def test_page_size_override(self, fake_http):
        orchestrator = make_orchestrator(fake_http, make_entries(25), page_size=10)

        page = await orchestrator.render_page(FEED_URL, 2, page_size=20)

        assert len(page.results) == 5
        assert page.total_pages == 2

    @pytest.mark.asyncio
    async def test_zero_page_size_rejected(self, fake_http):
        pipeline = FakePipeline()
        orchestrator = make_orchestrator(fake_http, make_entries(5), pipeline)

        with pytest.raises(ValueError):
            await orchestrator.render_page(FEED_URL, 1, page_size=0)

        assert pipeline.calls == []

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, fake_http):
        """Out-of-range pages are empty and trigger no article work."""
        pipeline = FakePipeline()
        orchestrator = make_orchestrator(fake_http, make_entries(25), pipeline)

        page = await orchestrator.render_page(FEED_URL, 4)

        assert page.results == []
        assert page.total_pages == 3
        assert page.current_page == 4
        assert pipeline.calls == []

    @pytest.mark.asyncio
    async def test_concurrency_bounded(self, fake_http):
        pipeline = FakePipeline(delays={f"https://a.example/{i}": 0.05 for i in range(1, 11)})
        orchestrator = make_orchestrator(fake_http, make_entries(10), pipeline, concurrency=3)

        await orchestrator.render_page(FEED_URL, 1)

        assert len(pipeline.calls) == 10
        assert pipeline.max_in_flight == 3

    @pytest.mark.asyncio
    async def test_feed_order_preserved(self, fake_http):
        """Earlier entries finishing last still come back first."""
        delays = {f"https://a.example/{i}": 0.01 * (6 - i) for i in range(1, 6)}
        orchestrator = make_orchestrator(
            fake_http, make_entries(5), FakePipeline(delays=delays), concurrency=5
        )

        page = await orchestrator.render_page(FEED_URL, 1)

        assert [r.entry.link for r in page.results] == [f"https://a.example/{i}" for i in range(1, 6)]
        assert [r.result.data.article for r in page.results] == [
            f"<p>https://a.example/{i}</p>" for i in range(1, 6)
        ]

    @pytest.mark.asyncio
    async def test_failure_isolated(self, fake_http):
        failing = "https://a.example/2"
        pipeline = FakePipeline(errors={
            failing: ArticleError(failing, "fetch", "Request timed out after 15000ms",
                                  cause=HttpError("Request timed out after 15000ms")),
        })
        orchestrator = make_orchestrator(fake_http, make_entries(3), pipeline)

        page = await orchestrator.render_page(FEED_URL, 1)

        results = [r.result for r in page.results]
        assert isinstance(results[0], ArticleSuccess)
        assert results[1] == ArticleFailure(error="Request timed out after 15000ms")
        assert not results[1].success
        assert results[1].data is None
        assert isinstance(results[2], ArticleSuccess)

    @pytest.mark.asyncio
    async def test_unexpected_exception_isolated(self, fake_http):
        pipeline = FakePipeline(errors={"https://a.example/1": RuntimeError()})
        orchestrator = make_orchestrator(fake_http, make_entries(2), pipeline)

        page = await orchestrator.render_page(FEED_URL, 1)

        assert page.results[0].result == ArticleFailure(error="RuntimeError")
        assert page.results[1].result.success

    @pytest.mark.asyncio
    async def test_feed_failure_propagates(self, fake_http):
        pipeline = FakePipeline()
        orchestrator = PageOrchestrator(feeds=FeedFetcher(fake_http), pipeline=pipeline)

        with pytest.raises(FeedError):
            await orchestrator.render_page(FEED_URL, 1)

        assert pipeline.calls == []

    @pytest.mark.asyncio
    async def test_process_entries_empty(self, fake_http):
        orchestrator = PageOrchestrator(feeds=FeedFetcher(fake_http), pipeline=FakePipeline())

        assert await orchestrator.process_entries([]) == []
