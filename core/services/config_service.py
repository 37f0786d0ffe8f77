"""
Server configuration summary.

INFO exposes far more than the dashboard shows; the curated field lists below
are what the configuration panel renders. Whether the server is shared or
dedicated cannot be detected from INFO.
"""

from typing import Any, Union

from redis.exceptions import RedisError

from core.cache import RedisStore
from core.config import Settings
from core.logging import get_logger
from core.models import ConfigReport, ConnectionInfo, ErrorKind, ErrorReport, InfoSection, SettingsReport
from core.parsing import parse_info

logger = get_logger("services.config")

SERVER_FIELDS = (
    "redis_version",
    "redis_mode",
    "os",
    "arch_bits",
    "tcp_port",
    "hz",
    "config_file",
    "process_id",
    "run_id",
    "executable",
    "uptime_in_seconds",
)

MEMORY_FIELDS = (
    "used_memory",
    "used_memory_human",
    "used_memory_peak",
    "used_memory_peak_human",
    "used_memory_rss",
    "total_system_memory",
    "total_system_memory_human",
    "maxmemory",
    "maxmemory_human",
    "maxmemory_policy",
    "allocator_frag_ratio",
    "mem_allocator",
)

CLIENT_FIELDS = ("connected_clients", "maxclients")

REPLICATION_FIELDS = ("role", "connected_slaves", "master_host", "master_port", "master_link_status")

CLUSTER_FIELDS = ("cluster_enabled",)

PERSISTENCE_FIELDS = (
    "rdb_last_save_time",
    "aof_enabled",
    "aof_rewrite_in_progress",
    "rdb_bgsave_in_progress",
)

STATS_FIELDS = (
    "instantaneous_ops_per_sec",
    "total_commands_processed",
    "total_connections_received",
    "keyspace_hits",
    "keyspace_misses",
    "pubsub_channels",
)


def _pick(section: InfoSection, fields: tuple[str, ...]) -> dict[str, Any]:
    """Selected fields of a section; absent fields are None."""
    return {name: section.get(name) for name in fields}


def summarize_server(store: RedisStore, settings: Settings) -> Union[ConfigReport, ErrorReport]:
    """
    Curated INFO fields plus the configured connection target.

    Returns:
        ConfigReport, or ErrorReport when PING or INFO fails
    """
    try:
        store.ping()
        info = parse_info(store.info_text())
    except RedisError as e:
        logger.warning("store_unreachable", error=str(e))
        return ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY)

    try:
        dbsize = store.dbsize()
    except RedisError as e:
        logger.debug("dbsize_unavailable", error=str(e))
        dbsize = 0

    server = _pick(info.get("Server", {}), SERVER_FIELDS)
    server["config_file"] = server["config_file"] or None

    stats = info.get("Stats", {})
    memory = _pick(info.get("Memory", {}), MEMORY_FIELDS)
    memory["evicted_keys"] = stats.get("evicted_keys")

    return ConfigReport(
        connection=ConnectionInfo(**settings.connection_summary()),
        server=server,
        memory=memory,
        clients=_pick(info.get("Clients", {}), CLIENT_FIELDS),
        replication=_pick(info.get("Replication", {}), REPLICATION_FIELDS),
        cluster=_pick(info.get("Cluster", {}), CLUSTER_FIELDS),
        persistence=_pick(info.get("Persistence", {}), PERSISTENCE_FIELDS),
        stats=_pick(stats, STATS_FIELDS),
        keyspace={"databases": len(info.get("Keyspace", {}))},
        dbsize=dbsize,
    )


def sanitized_settings(settings: Settings) -> SettingsReport:
    """Effective settings with credentials masked."""
    return SettingsReport(config=settings.sanitized())


__all__ = ["sanitized_settings", "summarize_server"]
