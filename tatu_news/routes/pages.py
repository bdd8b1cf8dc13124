"""
Feed page routes: Hacker News and The Verge.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..config import config, state
from ..environment import Bindings
from ..errors import TatuNewsError
from ..feeds import FeedSource, HACKER_NEWS, THE_VERGE
from ..runtime import build_context
from ..templating import render_error, templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def get_bindings() -> Bindings:
    """Dependency to get the bindings for this request."""
    return Bindings(kv=state.kv_namespace, ai=state.provider)


def parse_page(value: str | None) -> int:
    """Parse the page query parameter, falling back to 1 for anything invalid."""
    try:
        page = int(value) if value is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


async def render_feed(
    request: Request,
    source: FeedSource,
    page: int,
    bindings: Bindings,
) -> HTMLResponse:
    """Build the services for this request and render one page of a feed."""
    try:
        context = build_context(bindings, config)
        result = await context.pages.render_page(source.url, page)
    except TatuNewsError as e:
        logger.error(f"{source.title} route failed: {e.message}")
        return render_error(request, e.message)

    return templates.TemplateResponse(
        request,
        "feed.html",
        {"source": source, "page": result},
    )


@router.get("/", response_class=HTMLResponse)
async def hacker_news(
    request: Request,
    bindings: Annotated[Bindings, Depends(get_bindings)],
    page: str | None = None,
) -> HTMLResponse:
    """Hacker News front page with article content."""
    return await render_feed(request, HACKER_NEWS, parse_page(page), bindings)


@router.get("/the-verge", response_class=HTMLResponse)
async def the_verge(
    request: Request,
    bindings: Annotated[Bindings, Depends(get_bindings)],
    page: str | None = None,
) -> HTMLResponse:
    """The Verge front page with article content."""
    return await render_feed(request, THE_VERGE, parse_page(page), bindings)
