"""
Drupal cache report endpoint.
"""

from fastapi import APIRouter, Depends

from core.cache import RedisStore
from core.config import Settings
from core.drupal import aggregate_cache_keys

from ..dependencies import get_settings, get_store
from ..error_handlers import report_response

router = APIRouter(tags=["drupal"])


@router.get("/drupal")
def drupal_report(
    store: RedisStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Aggregate the keys under the configured Drupal prefix."""
    report = aggregate_cache_keys(
        store,
        prefix=settings.drupal_redis_prefix,
        scan_limit=settings.drupal_scan_limit,
        top_limit=settings.drupal_top_limit,
        scan_count=settings.scan_count,
    )
    return report_response(report)
