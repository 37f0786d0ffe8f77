"""
Redis Monitor CLI.

Runs the same services as the HTTP API against the configured store and
prints the reports.
"""

import argparse
import sys

from dotenv import load_dotenv
from redis.exceptions import RedisError

from core.cache import RedisStore, create_redis_client
from core.cli.formatters import format_output
from core.config import Settings, get_settings
from core.drupal import aggregate_cache_keys, search_by_cid
from core.logging import configure_logging, get_logger
from core.models import ErrorKind, ErrorReport, ReportModel
from core.services import collect_metrics, inspect_key, sanitized_settings, summarize_server

load_dotenv()

logger = get_logger("cli")


def _open_store(settings: Settings) -> RedisStore:
    return RedisStore(create_redis_client(settings))


def _emit(report: ReportModel, args) -> int:
    """Print a report; exit code 1 when it is an error."""
    print(format_output(report, args.format), end="")
    return 1 if isinstance(report, ErrorReport) else 0


def cmd_metrics(args, settings: Settings) -> int:
    """Show the metrics snapshot."""
    store = _open_store(settings)
    try:
        report = collect_metrics(
            store,
            sample_count=args.sample or settings.top_keys_sample_count,
            top_limit=args.top or settings.top_keys_limit,
            slowlog_entries=settings.slowlog_entries,
        )
    finally:
        store.close()
    return _emit(report, args)


def cmd_config(args, settings: Settings) -> int:
    """Show the server configuration summary, or the effective settings."""
    if args.effective:
        return _emit(sanitized_settings(settings), args)

    store = _open_store(settings)
    try:
        report = summarize_server(store, settings)
    finally:
        store.close()
    return _emit(report, args)


def cmd_drupal(args, settings: Settings) -> int:
    """Show the Drupal cache report."""
    store = _open_store(settings)
    try:
        report = aggregate_cache_keys(
            store,
            prefix=args.prefix or settings.drupal_redis_prefix,
            scan_limit=args.scan_limit or settings.drupal_scan_limit,
            top_limit=args.top or settings.drupal_top_limit,
            scan_count=settings.scan_count,
        )
    finally:
        store.close()
    return _emit(report, args)


def cmd_search_cid(args, settings: Settings) -> int:
    """Search keys by cache ID."""
    store = _open_store(settings)
    try:
        report = search_by_cid(
            store,
            prefix=args.prefix or settings.drupal_redis_prefix,
            cid=args.cid,
            bin=args.bin,
            limit=args.limit or settings.cid_search_limit,
            max_iterations=settings.cid_search_max_iterations,
            scan_count=settings.scan_count,
        )
    finally:
        store.close()
    return _emit(report, args)


def cmd_inspect(args, settings: Settings) -> int:
    """Show one key's type and value."""
    store = _open_store(settings)
    try:
        report = inspect_key(store, args.key)
    except RedisError as e:
        logger.warning("inspect_failed", key=args.key, error=str(e))
        report = ErrorReport(error=str(e), kind=ErrorKind.CONNECTIVITY)
    finally:
        store.close()
    return _emit(report, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Redis Monitor - Inspect Redis metrics and Drupal cache usage"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Show INFO, top keys, slowlog and latency")
    metrics_parser.add_argument("--sample", type=int, help="Keys sampled for top keys")
    metrics_parser.add_argument("--top", type=int, help="Number of top keys shown")
    metrics_parser.add_argument("--format", choices=["text", "json"], default="text")

    # Config command
    config_parser = subparsers.add_parser("config", help="Show server configuration")
    config_parser.add_argument(
        "--effective", action="store_true", help="Show effective settings instead of server INFO"
    )
    config_parser.add_argument("--format", choices=["text", "json"], default="text")

    # Drupal command
    drupal_parser = subparsers.add_parser("drupal", help="Aggregate Drupal cache keys")
    drupal_parser.add_argument("--prefix", help="Key prefix (default: DRUPAL_REDIS_PREFIX)")
    drupal_parser.add_argument("--scan-limit", type=int, help="Maximum keys scanned")
    drupal_parser.add_argument("--top", type=int, help="Number of top routes shown")
    drupal_parser.add_argument("--format", choices=["text", "json"], default="text")

    # Search command
    search_parser = subparsers.add_parser("search-cid", help="Find keys by cache ID")
    search_parser.add_argument("cid", help="Cache ID to match exactly")
    search_parser.add_argument("--bin", help="Restrict to one cache bin")
    search_parser.add_argument("--prefix", help="Key prefix (default: DRUPAL_REDIS_PREFIX)")
    search_parser.add_argument("--limit", type=int, help="Maximum number of keys")
    search_parser.add_argument("--format", choices=["text", "json"], default="text")

    # Inspect command
    inspect_parser = subparsers.add_parser("inspect", help="Show a key's value")
    inspect_parser.add_argument("key", help="Full key name")
    inspect_parser.add_argument("--format", choices=["text", "json"], default="text")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point with CLI interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "metrics": cmd_metrics,
        "config": cmd_config,
        "drupal": cmd_drupal,
        "search-cid": cmd_search_cid,
        "inspect": cmd_inspect,
    }

    if args.command not in commands:
        parser.print_help()
        return 2

    configure_logging(level="DEBUG" if args.debug else "ERROR")
    return commands[args.command](args, get_settings())


if __name__ == "__main__":
    sys.exit(main())
