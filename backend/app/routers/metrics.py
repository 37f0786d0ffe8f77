"""
Metrics snapshot endpoint polled by the dashboard.
"""

from fastapi import APIRouter, Depends

from core.cache import RedisStore
from core.config import Settings
from core.services import collect_metrics

from ..dependencies import get_settings, get_store
from ..error_handlers import report_response

router = APIRouter(tags=["metrics"])


@router.get("/metrics")
def metrics(
    store: RedisStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Current INFO sections, top keys, slowlog and latency."""
    report = collect_metrics(
        store,
        sample_count=settings.top_keys_sample_count,
        top_limit=settings.top_keys_limit,
        slowlog_entries=settings.slowlog_entries,
    )
    return report_response(report)
