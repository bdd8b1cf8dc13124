"""
Miscellaneous routes: health check.
"""

from fastapi import APIRouter

from .. import __version__
from ..config import config, state

router = APIRouter(tags=["misc"])


@router.get("/status")
async def health_check() -> dict:
    """API health check."""
    return {
        "status": "ok",
        "version": __version__,
        "kv_backend": config.KV_BACKEND,
        "kv_bound": state.kv_namespace is not None,
        "ai_available": state.provider is not None,
        "summarization_enabled": config.ENABLE_AI_SUMMARY and state.provider is not None,
    }
