"""
Bounded cursor-based iteration over the store's key namespace.

SCAN results are best-effort: a failing round trip ends the iteration and
whatever was collected so far is returned. A capped scan yields a prefix of
the matching keys in SCAN order, not a uniform sample.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Optional

from redis.exceptions import RedisError

from core.cache.redis_client import RedisStore
from core.constants import SCAN_START_CURSOR
from core.logging import get_logger

logger = get_logger("cache.scanner")


@dataclass
class ScanResult:
    """Keys gathered by a bounded scan."""

    keys: list[str] = field(default_factory=list)
    iterations: int = 0
    complete: bool = False


class ScanProgress:
    """Round-trip count and completion flag, filled in while iterating."""

    def __init__(self) -> None:
        self.iterations = 0
        self.complete = False


def iter_scan_batches(
    store: RedisStore,
    match: Optional[str] = None,
    count: int = 1000,
    max_iterations: Optional[int] = None,
    progress: Optional[ScanProgress] = None,
) -> Iterator[list[str]]:
    """
    Yield SCAN batches until the cursor wraps to 0 or max_iterations round trips ran.

    Args:
        store: Store to scan
        match: MATCH glob, or None for the whole keyspace
        count: COUNT hint per round trip
        max_iterations: Optional cap on round trips
    """
    progress = progress or ScanProgress()
    cursor = SCAN_START_CURSOR

    while True:
        if max_iterations is not None and progress.iterations >= max_iterations:
            return
        try:
            cursor, batch = store.scan(cursor, match=match, count=count)
        except RedisError as e:
            logger.debug("scan_failed", match=match, iterations=progress.iterations, error=str(e))
            return

        progress.iterations += 1
        if cursor == SCAN_START_CURSOR:
            progress.complete = True
        yield batch

        if progress.complete:
            return


def scan_keys(
    store: RedisStore,
    match: Optional[str] = None,
    count: int = 1000,
    limit: Optional[int] = None,
    max_iterations: Optional[int] = None,
) -> ScanResult:
    """
    Collect up to `limit` keys matching `match`.

    Returns:
        ScanResult whose key list never exceeds `limit`
    """
    progress = ScanProgress()
    keys: list[str] = []
    capped = False

    for batch in iter_scan_batches(store, match, count, max_iterations, progress):
        for key in batch:
            keys.append(key)
            if limit is not None and len(keys) >= limit:
                capped = True
                break
        if capped:
            break

    if capped:
        logger.info("scan_capped", match=match, limit=limit, iterations=progress.iterations)

    return ScanResult(
        keys=keys,
        iterations=progress.iterations,
        complete=progress.complete and not capped,
    )


__all__ = ["ScanProgress", "ScanResult", "iter_scan_batches", "scan_keys"]
