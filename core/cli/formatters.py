# Output formatters for reports

import json
from typing import Any

from core.models import (
    ConfigReport,
    DrupalReport,
    ErrorReport,
    KeyInspection,
    MetricsReport,
    ReportModel,
    SearchReport,
    SettingsReport,
)

RULE = "=" * 80


def format_json(report: ReportModel) -> str:
    """
    Format a report as JSON, using the same field names as the HTTP API.

    Returns - JSON string
    """
    return json.dumps(report.to_response(), indent=2, default=str)


def _format_bytes(size: Any) -> str:
    if not isinstance(size, (int, float)):
        return "N/A"
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def _format_ttl(ttl: Any) -> str:
    return "N/A" if ttl is None else str(ttl)


def _header(title: str) -> list[str]:
    return ["", RULE, title, RULE]


def format_drupal_text(report: DrupalReport) -> str:
    """
    Format the Drupal cache report as plain text.

    Returns - Formatted text string
    """
    output = _header(f"DRUPAL CACHE REPORT ({report.prefix})")
    output.append(f"\nKeys scanned: {report.scanned}")

    output.append("\nBins:")
    if not report.bins:
        output.append("  No keys found.")
    for summary in report.bins:
        output.append(
            f"  {summary.bin}: {summary.count} keys, {_format_bytes(summary.total_bytes)}, "
            f"avg TTL {_format_ttl(summary.avg_ttl)}"
        )
        if summary.max_key:
            output.append(f"    largest: {summary.max_key} ({_format_bytes(summary.max_bytes)})")

    if report.top_routes:
        output.append("\nTop Routes:")
        for i, route in enumerate(report.top_routes, 1):
            output.append(f"  {i}. {route.route}: {route.count} keys, {_format_bytes(route.bytes)}")
            if route.url:
                output.append(f"     URL: {route.url}")

    if report.themes:
        output.append("\nThemes:")
        for theme in report.themes:
            output.append(f"  {theme.theme}: {theme.count} keys, {_format_bytes(theme.bytes)}")

    if report.languages:
        output.append("\nLanguages:")
        for language in report.languages:
            output.append(f"  {language.lang_content}: {language.count} keys, {_format_bytes(language.bytes)}")

    output.append(
        f"\nAuthenticated: {report.auth_vs_anon.auth_count} | Anonymous: {report.auth_vs_anon.anon_count}"
    )
    output.append(f"\n{report.note}")
    output.append(RULE)
    return "\n".join(output) + "\n"


def format_search_text(report: SearchReport) -> str:
    """
    Format CID search results as a table.

    Returns - Table string
    """
    output = _header(f"CID SEARCH: {report.cid} (bin: {report.bin})")
    output.append(f"\nPattern: {report.pattern}")
    output.append(f"Matches: {report.count}\n")

    if not report.keys:
        output.append("No keys found.")
        output.append(RULE)
        return "\n".join(output) + "\n"

    columns = ["#", "Bin", "Type", "TTL", "Size", "Key"]
    rows = [
        [str(i), row.bin, row.type, _format_ttl(row.ttl), _format_bytes(row.size), row.key]
        for i, row in enumerate(report.keys, 1)
    ]
    widths = [max(len(col), *(len(r[idx]) for r in rows)) for idx, col in enumerate(columns)]

    header = " | ".join(col.ljust(widths[idx]) for idx, col in enumerate(columns))
    output.append(header)
    output.append("-" * len(header))
    for r in rows:
        output.append(" | ".join(value.ljust(widths[idx]) for idx, value in enumerate(r)))

    output.append(RULE)
    return "\n".join(output) + "\n"


def format_metrics_text(report: MetricsReport) -> str:
    """
    Format a metrics snapshot as plain text.

    Returns - Formatted text string
    """
    output = _header("REDIS METRICS")
    output.append(f"\nFetched: {report.fetched_at}")
    output.append(f"Version: {report.server.get('redis_version', 'N/A')}")
    output.append(f"Uptime (s): {report.server.get('uptime_in_seconds', 'N/A')}")
    output.append(f"Connected Clients: {report.clients.get('connected_clients', 'N/A')}")
    output.append(f"Memory Used: {report.memory.get('used_memory_human', 'N/A')}")
    output.append(f"Ops/sec: {report.stats.get('instantaneous_ops_per_sec', 'N/A')}")
    output.append(f"Keys (DBSIZE): {report.dbsize}")

    if report.keyspace:
        output.append("\nKeyspace:")
        for db_name, summary in report.keyspace.items():
            output.append(f"  {db_name}: {summary}")

    if report.top_keys:
        output.append("\nTop Keys:")
        for i, row in enumerate(report.top_keys, 1):
            output.append(f"  {i}. {row.key} ({_format_bytes(row.size)}, TTL {_format_ttl(row.ttl)})")

    output.append(f"\nSlowlog: {report.slowlog.length} entries")
    for entry in report.slowlog.entries:
        output.append(f"  #{entry.id} {entry.duration_us}us {entry.command}")

    if report.latency.latest:
        output.append("\nLatency:")
        for event in report.latency.latest:
            output.append(f"  {event.event}: latest {event.latest_ms}ms, max {event.max_ms}ms")

    output.append(RULE)
    return "\n".join(output) + "\n"


def _format_section(title: str, values: dict[str, Any]) -> list[str]:
    lines = [f"\n{title}:"]
    for name, value in values.items():
        lines.append(f"  {name}: {'N/A' if value is None else value}")
    return lines


def format_config_text(report: ConfigReport) -> str:
    """
    Format the server configuration summary as plain text.

    Returns - Formatted text string
    """
    connection = report.connection
    output = _header("REDIS CONFIGURATION")
    output.append(f"\nConnection: {connection.host}:{connection.port} (TLS: {'yes' if connection.tls else 'no'})")
    output.append(f"Keys (DBSIZE): {report.dbsize}")

    sections = [
        ("Server", report.server),
        ("Memory", report.memory),
        ("Clients", report.clients),
        ("Replication", report.replication),
        ("Cluster", report.cluster),
        ("Persistence", report.persistence),
        ("Stats", report.stats),
        ("Keyspace", report.keyspace),
    ]
    for title, values in sections:
        output.extend(_format_section(title, values))

    output.append(f"\n{report.note}")
    output.append(RULE)
    return "\n".join(output) + "\n"


def format_settings_text(report: SettingsReport) -> str:
    output = _header("EFFECTIVE SETTINGS")
    output.append("")
    for name, value in report.config.items():
        output.append(f"  {name}={value}")
    output.append(RULE)
    return "\n".join(output) + "\n"


def format_inspection_text(report: KeyInspection) -> str:
    output = _header(f"KEY: {report.key}")
    output.append(f"\nType: {report.type}")
    if report.value is None:
        output.append("Value: (none)")
    else:
        output.append("Value:")
        output.append(json.dumps(report.value, indent=2, default=str))
    output.append(RULE)
    return "\n".join(output) + "\n"


def format_error_text(report: ErrorReport) -> str:
    return f"Error ({report.kind.value}): {report.error}\n"


_TEXT_FORMATTERS = {
    ConfigReport: format_config_text,
    DrupalReport: format_drupal_text,
    ErrorReport: format_error_text,
    KeyInspection: format_inspection_text,
    MetricsReport: format_metrics_text,
    SearchReport: format_search_text,
    SettingsReport: format_settings_text,
}


def format_output(report: ReportModel, output_format: str = "text") -> str:
    """
    Format a report in the requested format.

    Raises:
        ValueError for an unsupported format or report type
    """
    if output_format == "json":
        return format_json(report) + "\n"
    if output_format != "text":
        raise ValueError(f"Unsupported format: {output_format}")

    formatter = _TEXT_FORMATTERS.get(type(report))
    if formatter is None:
        raise ValueError(f"No text formatter for {type(report).__name__}")
    return formatter(report)
