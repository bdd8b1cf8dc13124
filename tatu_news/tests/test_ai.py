"""
Tests for the AI summarizer and the LLM provider factory.
"""

import pytest

from tatu_news.ai import PLACEHOLDER_SUMMARY, AIService, make_ai_service
from tatu_news.environment import Bindings, Environment
from tatu_news.errors import AIError
from tatu_news.providers import (
    AnthropicProvider,
    OpenAIProvider,
    ProviderType,
    create_provider,
    get_provider_from_env,
)

from .samples import MockProvider


class TestAIService:
    """Tests for summarize()."""

    @pytest.mark.asyncio
    async def test_placeholder_when_disabled(self):
        """A bound provider is not called while summarization is off."""
        provider = MockProvider()
        service = AIService(provider=provider, enabled=False)

        assert await service.summarize("<p>Body</p>") == PLACEHOLDER_SUMMARY
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_placeholder_when_unbound(self):
        service = AIService(provider=None, enabled=True)

        assert not service.is_available()
        assert await service.summarize("<p>Body</p>", "https://example.com/a") == PLACEHOLDER_SUMMARY

    @pytest.mark.asyncio
    async def test_summarize_with_provider(self):
        provider = MockProvider(reply="  Rust drivers were merged.  ")
        service = AIService(provider=provider, enabled=True)

        summary = await service.summarize("<p>Body</p>", "https://example.com/a")

        assert summary == "Rust drivers were merged."
        assert len(provider.calls) == 1
        assert "https://example.com/a" in provider.calls[0]["user_prompt"]
        assert provider.calls[0]["system_prompt"] == AIService.SYSTEM_PROMPT

    @pytest.mark.asyncio
    async def test_content_truncated(self):
        provider = MockProvider()
        service = AIService(provider=provider, enabled=True)

        await service.summarize("x" * (AIService.MAX_CONTENT_LENGTH + 500))

        assert provider.calls[0]["user_prompt"].count("x") == AIService.MAX_CONTENT_LENGTH

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back_to_placeholder(self):
        service = AIService(provider=MockProvider(reply="   "), enabled=True)

        assert await service.summarize("<p>Body</p>") == PLACEHOLDER_SUMMARY

    @pytest.mark.asyncio
    async def test_provider_failure_raises_ai_error(self):
        service = AIService(provider=MockProvider(error=RuntimeError("rate limited")), enabled=True)

        with pytest.raises(AIError) as exc_info:
            await service.summarize("<p>Body</p>")

        assert exc_info.value.operation == "summarize"
        assert "rate limited" in exc_info.value.message


class TestMakeAIService:
    def test_bound(self):
        provider = MockProvider()
        service = make_ai_service(Environment(Bindings(ai=provider)), enabled=True)

        assert service.provider is provider
        assert service.enabled

    def test_unbound_falls_back(self):
        service = make_ai_service(Environment(Bindings()), enabled=True)

        assert service.provider is None
        assert not service.is_available()


class TestProviderFactory:
    """Tests for provider selection from API keys."""

    def test_no_keys(self):
        assert get_provider_from_env() is None

    def test_anthropic_first_by_default(self):
        provider = get_provider_from_env(anthropic_key="sk-ant", openai_key="sk-oai")

        assert isinstance(provider, AnthropicProvider)
        assert provider.name == "anthropic"

    def test_preferred_provider(self):
        provider = get_provider_from_env(
            anthropic_key="sk-ant", openai_key="sk-oai", preferred_provider="openai"
        )

        assert isinstance(provider, OpenAIProvider)
        assert provider.default_model == "gpt-4o-mini"

    def test_preferred_without_key_falls_back(self):
        provider = get_provider_from_env(openai_key="sk-oai", preferred_provider="anthropic")

        assert isinstance(provider, OpenAIProvider)

    def test_invalid_preferred_falls_back(self):
        provider = get_provider_from_env(anthropic_key="sk-ant", preferred_provider="gemini")

        assert isinstance(provider, AnthropicProvider)

    def test_model_alias_resolved(self):
        provider = create_provider(ProviderType.ANTHROPIC, "sk-ant", default_model="haiku")

        assert provider.default_model == "claude-haiku-4-5-20251001"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            create_provider("gemini", "key")
