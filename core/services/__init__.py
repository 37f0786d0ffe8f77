"""
Store services behind the dashboard panels.

Each service takes an explicit RedisStore and returns a report model; the
HTTP routers and the CLI are thin wrappers around them.
"""

from core.services.config_service import sanitized_settings, summarize_server
from core.services.inspect_service import inspect_key
from core.services.metrics_service import collect_metrics

__all__ = [
    "collect_metrics",
    "inspect_key",
    "sanitized_settings",
    "summarize_server",
]
