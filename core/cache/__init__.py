"""
Redis access layer.

Provides the store adapter and bounded namespace scanning:
- RedisStore wraps an injected redis-py client
- scan_keys / iter_scan_batches walk SCAN cursors under a hard cap

Usage:
    from core.cache import RedisStore, create_redis_client, scan_keys

    store = RedisStore(create_redis_client(settings))
    result = scan_keys(store, match="pantheon-redis-json:*", limit=3000)
"""

from core.cache.redis_client import RedisStore, create_redis_client, display_ttl
from core.cache.scanner import ScanProgress, ScanResult, iter_scan_batches, scan_keys

__all__ = [
    "RedisStore",
    "create_redis_client",
    "display_ttl",
    "ScanProgress",
    "ScanResult",
    "iter_scan_batches",
    "scan_keys",
]
