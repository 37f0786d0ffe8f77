"""
Metrics snapshot service.

Collects the data behind the dashboard panels in one pass:
- parsed INFO sections (Server, Clients, Memory, Stats, CPU, Keyspace)
- DBSIZE
- largest keys from a bounded whole-keyspace sample
- SLOWLOG and LATENCY LATEST

Only INFO is mandatory. Every other part degrades to an empty value when the
provider disables the command.
"""

from datetime import datetime, timezone
from typing import Any, Union

from redis.exceptions import RedisError

from core.cache import RedisStore, display_ttl, scan_keys
from core.constants import INFO_SECTIONS, TOP_KEYS_SCAN_COUNT
from core.logging import get_logger
from core.models import (
    ErrorKind,
    ErrorReport,
    Latency,
    LatencyEvent,
    MetricsReport,
    Slowlog,
    SlowlogEntry,
    TopKey,
)
from core.parsing import parse_info

logger = get_logger("services.metrics")


# =============================================================================
# Top Keys
# =============================================================================


def sample_top_keys(
    store: RedisStore,
    sample_count: int,
    top_limit: int,
    scan_count: int = TOP_KEYS_SCAN_COUNT,
) -> list[TopKey]:
    """
    Largest keys among the first `sample_count` keys SCAN returns.

    Keys without a readable size sort as 0 bytes.
    """
    sampled = scan_keys(store, match=None, count=scan_count, limit=sample_count)

    rows = [
        TopKey(
            key=key,
            ttl=display_ttl(store.fetch_ttl(key)),
            size=store.fetch_memory_usage(key),
        )
        for key in sampled.keys
    ]
    rows.sort(key=lambda row: row.size or 0, reverse=True)
    return rows[:top_limit]


# =============================================================================
# Slowlog / Latency
# =============================================================================


def _normalize_slowlog_entry(raw: dict[str, Any]) -> SlowlogEntry:
    command = raw.get("command", "")
    if isinstance(command, (list, tuple)):
        command = " ".join(str(part) for part in command)
    elif isinstance(command, bytes):
        command = command.decode("utf-8", errors="replace")

    return SlowlogEntry(
        id=int(raw.get("id", 0)),
        timestamp=int(raw.get("start_time", 0)),
        duration_us=int(raw.get("duration", 0)),
        command=str(command),
        client_address=raw.get("client_address") or None,
        client_name=raw.get("client_name") or None,
    )


def read_slowlog(store: RedisStore, entries: int) -> Slowlog:
    """Most recent slow commands; empty when SLOWLOG is unavailable."""
    try:
        length = store.slowlog_len()
        raw_entries = store.slowlog_get(entries)
    except RedisError as e:
        logger.debug("slowlog_unavailable", error=str(e))
        return Slowlog()

    return Slowlog(length=length, entries=[_normalize_slowlog_entry(raw) for raw in raw_entries])


def read_latency(store: RedisStore) -> Latency:
    """LATENCY LATEST rows; empty when latency monitoring is unavailable."""
    try:
        rows = store.latency_latest()
    except RedisError as e:
        logger.debug("latency_unavailable", error=str(e))
        return Latency()

    events = []
    for row in rows:
        if len(row) < 4:
            continue
        event, timestamp, latest_ms, max_ms = row[:4]
        events.append(
            LatencyEvent(
                event=str(event),
                timestamp=int(timestamp),
                latest_ms=int(latest_ms),
                max_ms=int(max_ms),
            )
        )
    return Latency(latest=events)


def _read_dbsize(store: RedisStore) -> int:
    try:
        return store.dbsize()
    except RedisError as e:
        logger.debug("dbsize_unavailable", error=str(e))
        return 0


# =============================================================================
# Snapshot
# =============================================================================


def collect_metrics(
    store: RedisStore,
    sample_count: int,
    top_limit: int,
    slowlog_entries: int,
    scan_count: int = TOP_KEYS_SCAN_COUNT,
) -> Union[MetricsReport, ErrorReport]:
    """
    Build one metrics snapshot.

    Args:
        store: Store to query
        sample_count: Keys sampled for the top-keys table
        top_limit: Rows kept in the top-keys table
        slowlog_entries: SLOWLOG GET count
        scan_count: SCAN COUNT hint for the sample

    Returns:
        MetricsReport, or ErrorReport when INFO cannot be read
    """
    try:
        info = parse_info(store.info_text())
    except RedisError as e:
        logger.warning("store_unreachable", error=str(e))
        return ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY)

    server, clients, memory, stats, cpu, keyspace = (info.get(name, {}) for name in INFO_SECTIONS)

    report = MetricsReport(
        server=server,
        clients=clients,
        memory=memory,
        stats=stats,
        cpu=cpu,
        keyspace=keyspace,
        dbsize=_read_dbsize(store),
        top_keys=sample_top_keys(store, sample_count, top_limit, scan_count),
        slowlog=read_slowlog(store, slowlog_entries),
        latency=read_latency(store),
        fetched_at=datetime.now(timezone.utc).isoformat(),
    )

    logger.info(
        "metrics_collected",
        dbsize=report.dbsize,
        top_keys=len(report.top_keys),
        slowlog_length=report.slowlog.length,
    )
    return report


__all__ = ["collect_metrics", "read_latency", "read_slowlog", "sample_top_keys"]
