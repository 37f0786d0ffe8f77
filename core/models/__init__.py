"""
Report models for Redis Monitor.

Single source of truth for the data contracts returned by the services.
Used by both the CLI and the backend.

Usage:
    from core.models import DrupalReport, ErrorReport, SearchReport
"""

from .base import ErrorKind, ErrorReport, InfoSection, ReportModel, TTLValue
from .drupal import (
    AuthVsAnon,
    BinSummary,
    DrupalReport,
    LanguageSummary,
    RouteSummary,
    SearchReport,
    SearchResultRow,
    ThemeSummary,
)
from .metrics import (
    ConfigReport,
    ConnectionInfo,
    KeyInspection,
    Latency,
    LatencyEvent,
    MetricsReport,
    SettingsReport,
    Slowlog,
    SlowlogEntry,
    TopKey,
)

__all__ = [
    # Base
    "ErrorKind",
    "ErrorReport",
    "InfoSection",
    "ReportModel",
    "TTLValue",
    # Drupal
    "AuthVsAnon",
    "BinSummary",
    "DrupalReport",
    "LanguageSummary",
    "RouteSummary",
    "SearchReport",
    "SearchResultRow",
    "ThemeSummary",
    # Metrics
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
