"""
Error types shared by the services and the article pipeline.

Infrastructure errors (HttpError, KVError, AIError, BindingError) are raised
by the service layer. FeedError and ArticleError wrap them at the domain
boundary with the failing step attached.
"""

from typing import Literal

KVOperation = Literal["get", "put", "delete"]
ArticleStep = Literal["fetch", "parse", "clean", "summarize", "cache"]


class TatuNewsError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HttpError(TatuNewsError):
    """HTTP request failed, returned a non-2xx status, or timed out."""

    def __init__(self, message: str, status: int | None = None, url: str | None = None):
        super().__init__(message)
        self.status = status
        self.url = url


class KVError(TatuNewsError):
    """The underlying key-value store failed."""

    def __init__(self, operation: KVOperation, key: str, message: str):
        super().__init__(message)
        self.operation = operation
        self.key = key


class AIError(TatuNewsError):
    """The AI capability failed."""

    def __init__(self, operation: str, message: str):
        super().__init__(message)
        self.operation = operation


class BindingError(TatuNewsError):
    """A named environment binding is missing."""

    def __init__(self, binding: str, message: str):
        super().__init__(message)
        self.binding = binding


class FeedError(TatuNewsError):
    """A feed could not be fetched or parsed, or had no entries."""

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        self.cause = cause


class ArticleError(TatuNewsError):
    """Processing a single article failed at the given step."""

    def __init__(
        self,
        url: str,
        step: ArticleStep,
        message: str,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.step = step
        self.cause = cause
