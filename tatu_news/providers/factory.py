"""
Provider factory for creating the AI binding from configured API keys.
"""

from enum import Enum

from .base import LLMProvider
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider


class ProviderType(Enum):
    """Available LLM provider types."""
    ANTHROPIC = "anthropic"
    OPENAI = "openai"


def create_provider(
    provider_type: ProviderType | str,
    api_key: str,
    default_model: str | None = None,
) -> LLMProvider:
    """
    Create an LLM provider instance.

    Raises:
        ValueError: If provider_type is unknown
    """
    if isinstance(provider_type, str):
        try:
            provider_type = ProviderType(provider_type.lower())
        except ValueError:
            raise ValueError(
                f"Unknown provider: {provider_type}. "
                f"Available: {[p.value for p in ProviderType]}"
            )

    if provider_type == ProviderType.ANTHROPIC:
        return AnthropicProvider(
            api_key=api_key,
            default_model=default_model or "claude-haiku-4-5",
        )
    return OpenAIProvider(
        api_key=api_key,
        default_model=default_model or "gpt-4o-mini",
    )


def get_provider_from_env(
    anthropic_key: str | None = None,
    openai_key: str | None = None,
    preferred_provider: str | None = None,
    default_model: str | None = None,
) -> LLMProvider | None:
    """
    Create a provider from available keys.

    Uses the preferred provider when its key is set, otherwise the first
    key found in order Anthropic > OpenAI. Returns None when no key is set.
    """
    providers = {
        ProviderType.ANTHROPIC: anthropic_key,
        ProviderType.OPENAI: openai_key,
    }

    if preferred_provider:
        try:
            pref_type = ProviderType(preferred_provider.lower())
            if providers.get(pref_type):
                return create_provider(pref_type, providers[pref_type], default_model=default_model)
        except ValueError:
            pass  # Invalid provider name, fall through to default order

    for provider_type, api_key in providers.items():
        if api_key:
            return create_provider(provider_type, api_key, default_model=default_model)

    return None
