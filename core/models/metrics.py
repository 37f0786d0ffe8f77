"""Store metrics, configuration and key inspection models."""

from typing import Any, Optional

from pydantic import Field

from core.constants import CONFIG_REPORT_NOTE

from .base import InfoSection, ReportModel, TTLValue


class TopKey(ReportModel):
    key: str
    ttl: TTLValue = None
    size: Optional[int] = None


class SlowlogEntry(ReportModel):
    id: int
    timestamp: int
    duration_us: int
    command: str
    client_address: Optional[str] = None
    client_name: Optional[str] = None


class Slowlog(ReportModel):
    length: int = 0
    entries: list[SlowlogEntry] = Field(default_factory=list)


class LatencyEvent(ReportModel):
    event: str
    timestamp: int
    latest_ms: int
    max_ms: int


class Latency(ReportModel):
    latest: list[LatencyEvent] = Field(default_factory=list)


class MetricsReport(ReportModel):
    """Latest snapshot for the dashboard panels; nothing is kept between polls."""

    ok: bool = True
    server: InfoSection = Field(default_factory=dict)
    clients: InfoSection = Field(default_factory=dict)
    memory: InfoSection = Field(default_factory=dict)
    stats: InfoSection = Field(default_factory=dict)
    cpu: InfoSection = Field(default_factory=dict)
    keyspace: InfoSection = Field(default_factory=dict)
    dbsize: int = 0
    top_keys: list[TopKey] = Field(default_factory=list)
    slowlog: Slowlog = Field(default_factory=Slowlog)
    latency: Latency = Field(default_factory=Latency)
    fetched_at: str


class ConnectionInfo(ReportModel):
    host: str
    port: int
    tls: bool = False


class ConfigReport(ReportModel):
    """Curated INFO fields describing how the server is set up."""

    ok: bool = True
    connection: ConnectionInfo
    server: dict[str, Any] = Field(default_factory=dict)
    memory: dict[str, Any] = Field(default_factory=dict)
    clients: dict[str, Any] = Field(default_factory=dict)
    replication: dict[str, Any] = Field(default_factory=dict)
    cluster: dict[str, Any] = Field(default_factory=dict)
    persistence: dict[str, Any] = Field(default_factory=dict)
    stats: dict[str, Any] = Field(default_factory=dict)
    keyspace: dict[str, Any] = Field(default_factory=dict)
    dbsize: int = 0
    note: str = CONFIG_REPORT_NOTE


class SettingsReport(ReportModel):
    ok: bool = True
    config: dict[str, str] = Field(default_factory=dict)


class KeyInspection(ReportModel):
    """Value of one key, shaped by its type."""

    key: str
    type: str
    value: Any = None


__all__ = [
    "ConfigReport",
    "ConnectionInfo",
    "KeyInspection",
    "Latency",
    "LatencyEvent",
    "MetricsReport",
    "SettingsReport",
    "Slowlog",
    "SlowlogEntry",
    "TopKey",
]
