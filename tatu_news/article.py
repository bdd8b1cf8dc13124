"""
Article Pipeline - cache lookup, fetch, extract, sanitize, summarize, store.

One call handles one article URL. A cached result (including a cached
"nothing extracted" result) ends the call immediately. Only fetch failures
escape as ArticleError; extraction, summarizer and cache-write problems are
logged and absorbed.
"""

import asyncio
import logging

from .ai import AIService, PLACEHOLDER_SUMMARY
from .errors import AIError, ArticleError, HttpError, KVError
from .extractors import extract_article, has_text, normalize_urls, sanitize_html
from .http_client import HttpClient
from .kv_storage import KVStorage
from .models import ArticleSummary

logger = logging.getLogger(__name__)

DEFAULT_ARTICLE_TIMEOUT_MS = 15000
DEFAULT_ARTICLE_CACHE_TTL = 60 * 60 * 24


class ArticlePipeline:
    """Turns an article URL into a cached ArticleSummary."""

    def __init__(
        self,
        kv: KVStorage,
        http: HttpClient,
        ai: AIService,
        timeout_ms: int = DEFAULT_ARTICLE_TIMEOUT_MS,
        cache_ttl: int = DEFAULT_ARTICLE_CACHE_TTL,
    ):
        self.kv = kv
        self.http = http
        self.ai = ai
        self.timeout_ms = timeout_ms
        self.cache_ttl = cache_ttl

    async def process(self, url: str) -> ArticleSummary:
        """
        Get the article and summary for a URL, from cache when possible.

        Raises:
            ArticleError: If the article could not be fetched (step="fetch")
        """
        try:
            result = await self._process(url)
        except ArticleError as e:
            logger.error(f"Failed to process article {url}: {e.message}")
            raise

        logger.info(f"Successfully processed article {url}, has content: {result.has_content}")
        return result

    async def _process(self, url: str) -> ArticleSummary:
        logger.info(f"Checking cache for article: {url}")
        cached = await self._get_cached(url)
        if cached is not None:
            logger.info(f"Cache hit for article: {url}")
            return cached

        logger.info(f"Cache miss, fetching article: {url}")
        try:
            html = await self.http.get(
                url,
                cache_ttl=self.cache_ttl,
                cache_everything=True,
                timeout_ms=self.timeout_ms,
            )
        except HttpError as e:
            raise ArticleError(url, "fetch", e.message, cause=e) from e

        clean_article = await self._parse_article(html, url)

        if clean_article:
            logger.info(f"Successfully parsed article: {url}")
            result = ArticleSummary(
                article=clean_article,
                summary=await self._summarize(clean_article, url),
            )
        else:
            logger.warning(f"No content extracted for article: {url}")
            result = ArticleSummary(article=None, summary=None)

        await self._store(url, result)
        return result

    async def _get_cached(self, url: str) -> ArticleSummary | None:
        try:
            return await self.kv.get_article_summary(url)
        except KVError as e:
            logger.warning(f"Cache read failed for {url}, treating as miss: {e.message}")
            return None

    async def _parse_article(self, html: str, url: str) -> str | None:
        """Normalize, extract and sanitize. Returns None when nothing usable was found."""
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, self._extract_clean, html, url)
        except Exception as e:
            logger.warning(f"Failed to parse article {url}: {e}")
            return None

    def _extract_clean(self, html: str, url: str) -> str | None:
        content = extract_article(normalize_urls(html, url), url)
        if content is None:
            return None

        # Extractors drop some attributes, so links are normalized again before sanitizing
        clean = sanitize_html(normalize_urls(content, url))
        return clean if has_text(clean) else None

    async def _summarize(self, content: str, url: str) -> str:
        try:
            return await self.ai.summarize(content, url)
        except AIError as e:
            logger.warning(f"AI summarization failed for {url}: {e.message}")
            return PLACEHOLDER_SUMMARY

    async def _store(self, url: str, result: ArticleSummary) -> None:
        try:
            await self.kv.put_article_summary(url, result)
        except KVError as e:
            logger.warning(f"Failed to cache article summary for {url}: {e.message}")
