"""
Per-request service graph.

build_context wires every service from the bindings once per request and
hands back a ServiceContext. Components get their collaborators through
their constructors, so nothing reaches for module-level singletons.
"""

from dataclasses import dataclass

from .ai import AIService, make_ai_service
from .article import ArticlePipeline
from .config import Config
from .environment import Bindings, Environment
from .feeds import FeedFetcher
from .http_client import HttpClient
from .kv_storage import KVStorage
from .pages import PageOrchestrator


@dataclass
class ServiceContext:
    env: Environment
    http: HttpClient
    kv: KVStorage
    ai: AIService
    feeds: FeedFetcher
    pipeline: ArticlePipeline
    pages: PageOrchestrator


def build_context(bindings: Bindings, config: Config) -> ServiceContext:
    """
    Build the services for one request.

    Raises:
        BindingError: If the KV namespace binding is missing
    """
    env = Environment(bindings, kv_binding_name=config.KV_NAMESPACE)
    kv = KVStorage(env.get_kv(config.KV_NAMESPACE))
    ai = make_ai_service(env, enabled=config.ENABLE_AI_SUMMARY)
    http = HttpClient(read_timeout_ms=config.BODY_READ_TIMEOUT_MS)

    feeds = FeedFetcher(http, timeout_ms=config.HTTP_TIMEOUT_MS)
    pipeline = ArticlePipeline(
        kv=kv,
        http=http,
        ai=ai,
        timeout_ms=config.ARTICLE_TIMEOUT_MS,
        cache_ttl=config.ARTICLE_CACHE_TTL,
    )
    pages = PageOrchestrator(
        feeds=feeds,
        pipeline=pipeline,
        page_size=config.PAGE_SIZE,
        concurrency=config.ARTICLE_CONCURRENCY,
    )

    return ServiceContext(
        env=env,
        http=http,
        kv=kv,
        ai=ai,
        feeds=feeds,
        pipeline=pipeline,
        pages=pages,
    )
