"""
Environment bindings lookup.

The KV namespace and the AI provider are handed to the app as named
bindings. Services ask for them by name and get a BindingError when one is
missing, instead of failing later on a None.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import BindingError

if TYPE_CHECKING:
    from .kv_storage import KVNamespace
    from .providers import LLMProvider

AI_BINDING = "AI"


@dataclass
class Bindings:
    """Named capabilities available to one request."""
    kv: "KVNamespace | None" = None
    ai: "LLMProvider | None" = None


class Environment:
    """Resolves named bindings, failing fast when one is absent."""

    def __init__(self, bindings: Bindings, kv_binding_name: str = "summary_rss_articles"):
        self.bindings = bindings
        self.kv_binding_name = kv_binding_name

    def get_kv(self, name: str) -> "KVNamespace":
        if name != self.kv_binding_name or self.bindings.kv is None:
            raise BindingError(
                binding=name,
                message=f"KV namespace '{name}' not found in bindings",
            )
        return self.bindings.kv

    def get_ai(self) -> "LLMProvider":
        if self.bindings.ai is None:
            raise BindingError(
                binding=AI_BINDING,
                message="AI binding not found in environment",
            )
        return self.bindings.ai
