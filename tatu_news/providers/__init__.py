"""
LLM provider abstraction layer.

The configured provider is the app's AI binding.
"""

from .base import LLMProvider, LLMResponse
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider
from .factory import create_provider, get_provider_from_env, ProviderType

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "AnthropicProvider",
    "OpenAIProvider",
    "create_provider",
    "get_provider_from_env",
    "ProviderType",
]
