"""
AI Summarizer - capability-gated article summarization.

Summaries currently stay on the placeholder text. The provider call only
runs when real summarization is switched on and a provider is bound.
"""

import logging

from .environment import Environment
from .errors import AIError, BindingError
from .providers import LLMProvider

logger = logging.getLogger(__name__)

PLACEHOLDER_SUMMARY = "Summary unavailable."


class AIService:
    """Summarizes article content through the bound LLM provider."""

    # Maximum content length to send to the provider
    MAX_CONTENT_LENGTH = 15000

    SYSTEM_PROMPT = (
        "You summarize news articles for a reader skimming a feed. "
        "Write two or three plain sentences in active voice. "
        "Do not start with phrases like 'This article'."
    )

    def __init__(self, provider: LLMProvider | None = None, enabled: bool = False):
        self.provider = provider
        self.enabled = enabled

    def is_available(self) -> bool:
        """Whether an AI capability is bound."""
        return self.provider is not None

    async def summarize(self, content: str, url: str | None = None) -> str:
        """
        Summarize article content.

        Returns the placeholder unless summarization is enabled and a
        provider is bound.

        Raises:
            AIError: If the provider call fails
        """
        logger.info(f"AI summarization requested for {url or 'content'}")

        if not self.enabled or self.provider is None:
            return PLACEHOLDER_SUMMARY

        truncated = content[:self.MAX_CONTENT_LENGTH]
        user_prompt = f"URL: {url}\n\nArticle:\n{truncated}" if url else f"Article:\n{truncated}"

        try:
            response = await self.provider.complete_async(
                user_prompt=user_prompt,
                system_prompt=self.SYSTEM_PROMPT,
            )
        except Exception as e:
            raise AIError("summarize", f"Failed to summarize content: {e}") from e

        return response.text.strip() or PLACEHOLDER_SUMMARY


def make_ai_service(env: Environment, enabled: bool = False) -> AIService:
    """Build the AI service, falling back to the unavailable one when unbound."""
    try:
        provider = env.get_ai()
    except BindingError:
        logger.warning("AI binding not available, summaries will use the placeholder")
        return AIService(provider=None, enabled=enabled)
    return AIService(provider=provider, enabled=enabled)
