"""
HTTP Client - Single-attempt text fetching with timeouts.

Handles:
- HTTP GET with browser-like headers
- Request timeout plus a separate, shorter body-read timeout
- Advisory cache directives (sent as Cache-Control)
- Mapping every failure to HttpError
"""

import asyncio
import logging

import aiohttp

from .errors import HttpError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_READ_TIMEOUT_MS = 10000


class HttpClient:
    """Fetches URLs and returns decoded text or raises HttpError."""

    def __init__(
        self,
        read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS,
        user_agent: str | None = None,
    ):
        self.read_timeout_ms = read_timeout_ms
        self.user_agent = user_agent or (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
            "AppleWebKit/537.36 (KHTML, like Gecko) "
            "Chrome/120.0.0.0 Safari/537.36"
        )
        self.headers = {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,application/rss+xml,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.9",
        }

    def _cache_headers(self, cache_ttl: int | None, cache_everything: bool) -> dict[str, str]:
        """Translate cache directives into request headers. Advisory only."""
        if not cache_ttl:
            return {}
        directive = f"max-age={cache_ttl}"
        if cache_everything:
            directive += ", stale-while-revalidate"
        return {"Cache-Control": directive}

    async def get(
        self,
        url: str,
        cache_ttl: int | None = None,
        cache_everything: bool = False,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> str:
        """
        Fetch a URL and return its body as text.

        Args:
            url: The URL to fetch
            cache_ttl: Optional cache lifetime hint in seconds
            cache_everything: Ask caches to keep the response even if it would not normally be cached
            timeout_ms: Total request timeout

        Returns:
            Response body decoded as text

        Raises:
            HttpError: On network failure, non-2xx status, or timeout
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        extra_headers = self._cache_headers(cache_ttl, cache_everything)

        try:
            async with aiohttp.ClientSession(headers=self.headers, timeout=timeout) as session:
                async with session.get(url, headers=extra_headers, allow_redirects=True) as resp:
                    if not 200 <= resp.status < 300:
                        raise HttpError(
                            f"HTTP {resp.status}: {resp.reason}",
                            status=resp.status,
                            url=url,
                        )
                    return await self._read_text(resp, url, deadline, timeout_ms)
        except asyncio.TimeoutError:
            raise HttpError(f"Request timed out after {timeout_ms}ms", url=url)
        except aiohttp.ClientError as e:
            raise HttpError(f"Failed to fetch '{url}': {e}", url=url) from e

    async def _read_text(
        self, resp: aiohttp.ClientResponse, url: str, deadline: float, timeout_ms: int
    ) -> str:
        # The request deadline keeps running while the body is read
        remaining = deadline - asyncio.get_running_loop().time()
        if remaining < self.read_timeout_ms / 1000:
            budget, limit_ms = remaining, timeout_ms
        else:
            budget, limit_ms = self.read_timeout_ms / 1000, self.read_timeout_ms

        try:
            return await asyncio.wait_for(resp.text(errors="replace"), timeout=max(budget, 0))
        except asyncio.TimeoutError:
            raise HttpError(f"Request timed out after {limit_ms}ms", url=url)
        except aiohttp.ClientError as e:
            raise HttpError(f"Failed to read response text from '{url}': {e}", url=url) from e
