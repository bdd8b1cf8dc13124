"""
Route modules.
"""

from .pages import router as pages_router
from .misc import router as misc_router

__all__ = [
    "pages_router",
    "misc_router",
]
