"""
Jinja2 templates shared by the routes and the app-level error handlers.
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from .feeds import FEED_SOURCES

TEMPLATES_DIR = Path(__file__).parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["feed_sources"] = list(FEED_SOURCES.values())


def render_error(request: Request, message: str, status_code: int = 500) -> HTMLResponse:
    """Render the error page with the given status."""
    return templates.TemplateResponse(
        request,
        "error.html",
        {"message": message},
        status_code=status_code,
    )


def render_not_found(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "not_found.html",
        {"path": request.url.path},
        status_code=404,
    )
