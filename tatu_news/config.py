"""
Configuration and application state management.
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

if TYPE_CHECKING:
    from .kv_storage import KVNamespace
    from .providers import LLMProvider

# Load environment variables
load_dotenv()


def _parse_bool(value: str | None, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


class Config:
    """Application configuration from environment."""
    # LLM Provider configuration
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "")
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")

    # Preferred provider: "anthropic" or "openai"
    # If not set, uses the first available key in order: Anthropic > OpenAI
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "")

    # Summaries stay on the placeholder text unless this is switched on
    ENABLE_AI_SUMMARY: bool = _parse_bool(os.getenv("ENABLE_AI_SUMMARY"), default=False)

    # KV namespace binding: "disk" persists under KV_DIR, "memory" lives per process
    KV_NAMESPACE: str = os.getenv("KV_NAMESPACE", "summary_rss_articles")
    KV_BACKEND: str = os.getenv("KV_BACKEND", "disk")
    KV_DIR: Path = Path(os.getenv("KV_DIR", "./data/kv"))

    PAGE_SIZE: int = int(os.getenv("PAGE_SIZE", "10"))
    ARTICLE_CONCURRENCY: int = int(os.getenv("ARTICLE_CONCURRENCY", "3"))

    # Timeouts (ms)
    HTTP_TIMEOUT_MS: int = int(os.getenv("HTTP_TIMEOUT_MS", "30000"))
    BODY_READ_TIMEOUT_MS: int = int(os.getenv("BODY_READ_TIMEOUT_MS", "10000"))
    ARTICLE_TIMEOUT_MS: int = int(os.getenv("ARTICLE_TIMEOUT_MS", "15000"))

    # Edge cache hint for article fetches (seconds)
    ARTICLE_CACHE_TTL: int = int(os.getenv("ARTICLE_CACHE_TTL", str(60 * 60 * 24)))

    PORT: int = int(os.getenv("PORT", "5005"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


config = Config()


class AppState:
    """
    Process-wide bindings.

    Only long-lived handles live here. Services are built per request
    from these in runtime.build_context.
    """
    kv_namespace: "KVNamespace | None" = None
    provider: "LLMProvider | None" = None  # LLM provider instance


state = AppState()
