"""
Drupal cache aggregation engine.

Scans the Drupal key namespace once and folds every key into five aggregates:
- per-bin totals (count, bytes, running TTL average, largest key)
- top dynamic_page_cache routes
- per-theme and per-language totals
- authenticated vs anonymous dynamic_page_cache entries

Rows are folded as they are built; nothing is retained between requests.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from redis.exceptions import RedisError

from core.cache import RedisStore, display_ttl, scan_keys
from core.constants import DYNAMIC_PAGE_CACHE_BIN, NO_LANGUAGE
from core.drupal.keys import CacheKeyRow, decode_key
from core.logging import LogContext, get_logger, log_timing
from core.models import (
    AuthVsAnon,
    BinSummary,
    DrupalReport,
    ErrorKind,
    ErrorReport,
    LanguageSummary,
    RouteSummary,
    ThemeSummary,
)

logger = get_logger("drupal.aggregation")


# =============================================================================
# Accumulators
# =============================================================================


@dataclass
class BinStat:
    count: int = 0
    total_bytes: int = 0
    avg_ttl: Optional[int] = None
    max_bytes: int = 0
    max_key: Optional[str] = None


@dataclass
class RouteStat:
    bytes: int = 0
    count: int = 0
    url: Optional[str] = None
    theme: Optional[str] = None


@dataclass
class SizeStat:
    bytes: int = 0
    count: int = 0


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class CacheAggregator:
    """
    Single-pass fold of decoded rows into the report aggregates.

    Dicts keep insertion order, and the final sorts are stable, so ties keep
    first-seen order.

    Usage:
        aggregator = CacheAggregator()
        for row in rows:
            aggregator.add(row)
        report = aggregator.build_report(prefix, top_limit=25)
    """

    def __init__(self) -> None:
        self.scanned = 0
        self.bins: dict[str, BinStat] = {}
        self.routes: dict[str, RouteStat] = {}
        self.themes: dict[str, SizeStat] = {}
        self.languages: dict[str, SizeStat] = {}
        self.auth_count = 0
        self.anon_count = 0

    def add(self, row: CacheKeyRow) -> None:
        """Fold one row. A missing size counts as 0 bytes."""
        self.scanned += 1
        size = row.bytes or 0

        self._add_to_bin(row, size)

        if row.bin == DYNAMIC_PAGE_CACHE_BIN and row.route:
            route = self.routes.get(row.route)
            if route is None:
                # url and theme come from the first row seen for the route
                route = RouteStat(url=row.url or row.url_path, theme=row.theme)
                self.routes[row.route] = route
            route.count += 1
            route.bytes += size

        if row.theme:
            theme = self.themes.setdefault(row.theme, SizeStat())
            theme.count += 1
            theme.bytes += size

        language = self.languages.setdefault(row.lang_content or NO_LANGUAGE, SizeStat())
        language.count += 1
        language.bytes += size

        if row.bin == DYNAMIC_PAGE_CACHE_BIN:
            if row.is_anon:
                self.anon_count += 1
            if row.is_auth:
                self.auth_count += 1

    def _add_to_bin(self, row: CacheKeyRow, size: int) -> None:
        stat = self.bins.setdefault(row.bin, BinStat())
        stat.count += 1
        stat.total_bytes += size

        if size > stat.max_bytes:
            stat.max_bytes = size
            stat.max_key = row.key

        # Running pairwise average, not an arithmetic mean; PERSIST and -2 are excluded
        ttl = row.ttl
        if isinstance(ttl, int) and ttl >= 0:
            if stat.avg_ttl is None:
                stat.avg_ttl = ttl
            else:
                stat.avg_ttl = _round_half_up((stat.avg_ttl + ttl) / 2)

    def build_report(self, prefix: str, top_limit: int) -> DrupalReport:
        """Sort the aggregates and build the report."""
        bins = sorted(
            (
                BinSummary(
                    bin=name,
                    count=stat.count,
                    total_bytes=stat.total_bytes,
                    avg_ttl=stat.avg_ttl,
                    max_bytes=stat.max_bytes,
                    max_key=stat.max_key,
                )
                for name, stat in self.bins.items()
            ),
            key=lambda summary: summary.total_bytes,
            reverse=True,
        )

        routes = sorted(
            (
                RouteSummary(route=name, bytes=stat.bytes, count=stat.count, url=stat.url, theme=stat.theme)
                for name, stat in self.routes.items()
            ),
            key=lambda summary: summary.bytes,
            reverse=True,
        )

        themes = sorted(
            (ThemeSummary(theme=name, bytes=stat.bytes, count=stat.count) for name, stat in self.themes.items()),
            key=lambda summary: summary.bytes,
            reverse=True,
        )

        languages = sorted(
            (
                LanguageSummary(lang_content=name, bytes=stat.bytes, count=stat.count)
                for name, stat in self.languages.items()
            ),
            key=lambda summary: summary.bytes,
            reverse=True,
        )

        return DrupalReport(
            scanned=self.scanned,
            prefix=prefix,
            bins=bins,
            top_routes=routes[:top_limit],
            themes=themes,
            languages=languages,
            auth_vs_anon=AuthVsAnon(auth_count=self.auth_count, anon_count=self.anon_count),
        )


# =============================================================================
# Aggregation Pass
# =============================================================================


def enrich_row(store: RedisStore, row: CacheKeyRow) -> CacheKeyRow:
    """Attach best-effort TTL and MEMORY USAGE; failures leave the fields as None."""
    row.ttl = display_ttl(store.fetch_ttl(row.key))
    row.bytes = store.fetch_memory_usage(row.key)
    return row


@log_timing("drupal_aggregation")
def aggregate_cache_keys(
    store: RedisStore,
    prefix: str,
    scan_limit: int,
    top_limit: int,
    scan_count: int = 1000,
) -> Union[DrupalReport, ErrorReport]:
    """
    Build the Drupal cache report for one prefix.

    Args:
        store: Store to scan
        prefix: Key namespace, without the trailing ":"
        scan_limit: Maximum number of keys visited
        top_limit: Number of routes kept in top_routes
        scan_count: SCAN COUNT hint

    Returns:
        DrupalReport, or ErrorReport when the store is unreachable
    """
    with LogContext(prefix=prefix, operation="drupal_report"):
        try:
            store.ping()
        except RedisError as e:
            logger.warning("store_unreachable", error=str(e))
            return ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY)

        result = scan_keys(store, match=f"{prefix}:*", count=scan_count, limit=scan_limit)

        aggregator = CacheAggregator()
        for key in result.keys:
            aggregator.add(enrich_row(store, decode_key(key)))

        report = aggregator.build_report(prefix, top_limit)
        logger.info(
            "drupal_aggregation_complete",
            scanned=report.scanned,
            bins=len(report.bins),
            routes=len(aggregator.routes),
            complete=result.complete,
        )
        return report


__all__ = ["BinStat", "CacheAggregator", "RouteStat", "SizeStat", "aggregate_cache_keys", "enrich_row"]
