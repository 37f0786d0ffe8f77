"""
Key lookup endpoints: CID search and single-key inspection.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from redis.exceptions import RedisError

from core.cache import RedisStore
from core.config import Settings
from core.drupal import search_by_cid
from core.logging import get_logger
from core.models import ErrorKind, ErrorReport
from core.services import inspect_key

from ..dependencies import get_settings, get_store
from ..error_handlers import report_response

logger = get_logger("api.keys")

router = APIRouter(tags=["keys"])


@router.get("/search-cid")
def search_cid(
    cid: Optional[str] = Query(default=None),
    bin: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1),
    store: RedisStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Find the keys stored for one cache ID."""
    report = search_by_cid(
        store,
        prefix=settings.drupal_redis_prefix,
        cid=cid,
        bin=bin,
        limit=limit or settings.cid_search_limit,
        max_iterations=settings.cid_search_max_iterations,
        scan_count=settings.scan_count,
    )
    return report_response(report)


@router.get("/inspect-key")
def inspect(
    key: Optional[str] = Query(default=None),
    store: RedisStore = Depends(get_store),
):
    """Return a key's type and value."""
    if not key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing key parameter")

    try:
        inspection = inspect_key(store, key)
    except RedisError as e:
        logger.warning("inspect_failed", key=key, error=str(e))
        return report_response(ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY))

    return report_response(inspection)
