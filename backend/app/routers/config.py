"""
Server configuration endpoints.
"""

from fastapi import APIRouter, Depends

from core.cache import RedisStore
from core.config import Settings
from core.services import sanitized_settings, summarize_server

from ..dependencies import get_settings, get_store
from ..error_handlers import report_response

router = APIRouter(prefix="/config", tags=["config"])


@router.get("")
def server_config(
    store: RedisStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Curated INFO fields and the connection target."""
    return report_response(summarize_server(store, settings))


@router.get("/get")
def effective_settings(settings: Settings = Depends(get_settings)):
    """Effective settings, credentials masked."""
    return report_response(sanitized_settings(settings))
