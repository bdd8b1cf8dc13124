"""
Tatu News Server

FastAPI application providing:
- Hacker News and The Verge pages with reader-mode articles
- Health check
- HTML 404 and 500 pages
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import config, state
from .kv_storage import create_namespace
from .providers import get_provider_from_env
from .routes import misc_router, pages_router
from .templating import render_error, render_not_found

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the process-wide bindings."""
    # Skip if already bound (e.g., by tests)
    if state.kv_namespace is None:
        state.kv_namespace = create_namespace(config.KV_BACKEND, config.KV_DIR)
        logger.info(f"KV namespace '{config.KV_NAMESPACE}' bound ({config.KV_BACKEND})")

    if state.provider is None:
        state.provider = get_provider_from_env(
            anthropic_key=config.ANTHROPIC_API_KEY or None,
            openai_key=config.OPENAI_API_KEY or None,
            preferred_provider=config.LLM_PROVIDER or None,
            default_model=config.LLM_MODEL or None,
        )
        if state.provider:
            logger.info(f"LLM provider initialized: {state.provider.name}")
        else:
            logger.warning(
                "No LLM API key configured. Set ANTHROPIC_API_KEY or OPENAI_API_KEY. "
                "Summaries will use the placeholder text."
            )

    yield


app = FastAPI(
    title="Tatu News",
    version=__version__,
    lifespan=lifespan
)

app.include_router(misc_router)
app.include_router(pages_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return render_not_found(request)
    return render_error(request, str(exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"App error on {request.url.path}")
    return render_error(request, str(exc) or exc.__class__.__name__)
