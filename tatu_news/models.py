"""
Domain objects passed between the feed fetcher, the article pipeline and
the page templates.
"""

from dataclasses import dataclass
from typing import Any, Literal


@dataclass(frozen=True)
class FeedEntry:
    """One item from a source feed."""
    title: str
    link: str
    comments: str


@dataclass(frozen=True)
class ArticleSummary:
    """
    Sanitized article HTML and its summary.

    article=None means nothing could be extracted. A summary of None with
    an article present means extraction worked but there is no summary yet.
    """
    article: str | None = None
    summary: str | None = None

    @property
    def has_content(self) -> bool:
        return bool(self.article)

    def to_dict(self) -> dict[str, str | None]:
        return {"article": self.article, "summary": self.summary}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArticleSummary":
        return cls(article=data.get("article"), summary=data.get("summary"))


@dataclass(frozen=True)
class ArticleSuccess:
    data: ArticleSummary
    success: Literal[True] = True


@dataclass(frozen=True)
class ArticleFailure:
    error: str
    success: Literal[False] = False
    data: None = None


ArticleProcessingResult = ArticleSuccess | ArticleFailure


@dataclass(frozen=True)
class ArticleWithEntry:
    entry: FeedEntry
    result: ArticleProcessingResult


@dataclass
class PageResult:
    """One rendered page of a feed with pagination metadata."""
    results: list[ArticleWithEntry]
    total_items: int
    total_pages: int
    current_page: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
