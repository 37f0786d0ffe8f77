"""
CID search over the Drupal key namespace.

SCAN MATCH globs only narrow the candidates ("node_1*" also matches
"node_10"), so every candidate is checked for an exact CID match before it is
kept.
"""

from typing import Optional, Union

from redis.exceptions import RedisError

from core.cache import RedisStore, display_ttl, iter_scan_batches
from core.constants import ALL_BINS, TYPE_UNKNOWN
from core.drupal.keys import build_search_pattern, extract_cid_and_bin
from core.logging import get_logger
from core.models import ErrorKind, ErrorReport, SearchReport, SearchResultRow

logger = get_logger("drupal.search")

MISSING_CID_ERROR = "Missing 'cid' parameter"


def find_cid_keys(
    store: RedisStore,
    prefix: str,
    cid: str,
    bin: Optional[str] = None,
    limit: int = 100,
    max_iterations: int = 10,
    scan_count: int = 1000,
) -> list[tuple[str, str]]:
    """
    Collect (key, bin) pairs whose CID equals `cid`, in SCAN order.

    Stops after `limit` matches or `max_iterations` SCAN round trips.
    """
    pattern = build_search_pattern(prefix, bin, cid)
    matches: list[tuple[str, str]] = []

    for batch in iter_scan_batches(store, match=pattern, count=scan_count, max_iterations=max_iterations):
        for key in batch:
            parsed = extract_cid_and_bin(key, prefix)
            if parsed is None:
                continue
            key_bin, key_cid = parsed
            if key_cid != cid or (bin and key_bin != bin):
                continue
            matches.append((key, key_bin))
            if len(matches) >= limit:
                return matches

    return matches


def describe_key(store: RedisStore, key: str, bin_name: str, cid: str) -> SearchResultRow:
    """Enrich one match; each field degrades on its own."""
    return SearchResultRow(
        key=key,
        bin=bin_name,
        cid=cid,
        ttl=display_ttl(store.fetch_ttl(key)),
        type=store.fetch_type(key) or TYPE_UNKNOWN,
        size=store.fetch_memory_usage(key),
    )


def search_by_cid(
    store: RedisStore,
    prefix: str,
    cid: Optional[str],
    bin: Optional[str] = None,
    limit: int = 100,
    max_iterations: int = 10,
    scan_count: int = 1000,
) -> Union[SearchReport, ErrorReport]:
    """
    Find keys for one cache ID, optionally restricted to a bin.

    Args:
        store: Store to scan
        prefix: Key namespace, without the trailing ":"
        cid: Cache ID to match exactly
        bin: Bin filter; None or "" searches every bin
        limit: Maximum number of keys returned
        max_iterations: Maximum number of SCAN round trips

    Returns:
        SearchReport, or ErrorReport for a missing cid (validation) or an unreachable store
    """
    if not cid:
        return ErrorReport(error=MISSING_CID_ERROR, kind=ErrorKind.VALIDATION)

    try:
        store.ping()
    except RedisError as e:
        logger.warning("store_unreachable", error=str(e))
        return ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY)

    bin = bin or None
    pattern = build_search_pattern(prefix, bin, cid)
    matches = find_cid_keys(store, prefix, cid, bin, limit, max_iterations, scan_count)
    rows = [describe_key(store, key, key_bin, cid) for key, key_bin in matches]

    logger.info("cid_search_complete", cid=cid, bin=bin, pattern=pattern, count=len(rows))

    return SearchReport(cid=cid, bin=bin or ALL_BINS, count=len(rows), keys=rows, pattern=pattern)


__all__ = ["MISSING_CID_ERROR", "describe_key", "find_cid_keys", "search_by_cid"]
