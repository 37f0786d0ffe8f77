"""
Redis store adapter.

Wraps an injected redis-py client with the introspection calls the monitor needs:
- Mandatory calls (PING, INFO, SCAN) raise RedisError so callers can fail the request
- Best-effort per-key fetches (TTL, TYPE, MEMORY USAGE) return None on failure
- INFO is kept as raw text; section parsing lives in core.parsing.info_parser

The client is created once by create_redis_client() and passed in explicitly;
nothing here holds a process-wide connection.
"""

from typing import Any, Optional

import redis
from redis.exceptions import RedisError

from core.config import Settings
from core.constants import PERSIST, TTL_NO_EXPIRY
from core.logging import get_logger
from core.models import TTLValue

logger = get_logger("cache")


def _raw_info(response: Any, **options: Any) -> str:
    if isinstance(response, bytes):
        return response.decode("utf-8", errors="replace")
    return response


def create_redis_client(settings: Settings) -> "redis.Redis":
    """
    Build a redis-py client from settings.

    REDIS_URL takes precedence over the host/port fields. Connections are opened
    lazily by redis-py on the first command.
    """
    options: dict[str, Any] = {
        "socket_timeout": settings.redis_socket_timeout,
        "socket_connect_timeout": settings.redis_socket_timeout,
        "decode_responses": True,
    }

    if settings.redis_url:
        client = redis.Redis.from_url(settings.redis_url, **options)
    else:
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            db=settings.redis_db,
            username=settings.redis_username,
            password=settings.redis_password,
            ssl=settings.redis_tls,
            **options,
        )

    client.set_response_callback("INFO", _raw_info)
    logger.info("redis_client_created", **settings.connection_summary())
    return client


class RedisStore:
    """
    Capability view of a key-value store used by the scanners and services.

    Usage:
        store = RedisStore(create_redis_client(get_settings()))
        store.ping()
        ttl = store.fetch_ttl("pantheon-redis-json:render:abc")  # None if the call failed
    """

    def __init__(self, client: "redis.Redis"):
        self.client = client

    # =========================================================================
    # Mandatory Operations (raise RedisError)
    # =========================================================================

    def ping(self) -> bool:
        """Liveness check."""
        return bool(self.client.ping())

    def info_text(self) -> str:
        """Raw INFO reply."""
        return _raw_info(self.client.execute_command("INFO"))

    def dbsize(self) -> int:
        """Number of keys in the selected database."""
        return int(self.client.dbsize())

    def scan(self, cursor: int, match: Optional[str] = None, count: Optional[int] = None) -> tuple[int, list[str]]:
        """One SCAN round trip."""
        next_cursor, batch = self.client.scan(cursor=cursor, match=match, count=count)
        return int(next_cursor), [_as_text(key) for key in batch]

    def key_type(self, key: str) -> str:
        """TYPE of a key ("none" when absent)."""
        return _as_text(self.client.type(key))

    # =========================================================================
    # Best-effort Fetches (None on failure)
    # =========================================================================

    def fetch_ttl(self, key: str) -> Optional[int]:
        """TTL in seconds, -1 for no expiry, -2 for missing, None if the call failed."""
        try:
            result = self.client.ttl(key)
        except RedisError as e:
            logger.debug("store_fetch_failed", command="TTL", key=key, error=str(e))
            return None
        if isinstance(result, (int, float)):
            return int(result)
        return None

    def fetch_type(self, key: str) -> Optional[str]:
        """TYPE of a key, None if the call failed."""
        try:
            return self.key_type(key)
        except RedisError as e:
            logger.debug("store_fetch_failed", command="TYPE", key=key, error=str(e))
            return None

    def fetch_memory_usage(self, key: str) -> Optional[int]:
        """
        MEMORY USAGE in bytes.

        Some managed providers disable the MEMORY command; that and a nil
        reply for a vanished key both give None.
        """
        try:
            result = self.client.memory_usage(key)
        except RedisError as e:
            logger.debug("store_fetch_failed", command="MEMORY USAGE", key=key, error=str(e))
            return None
        if isinstance(result, (int, float)):
            return int(result)
        return None

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def slowlog_len(self) -> int:
        return int(self.client.slowlog_len())

    def slowlog_get(self, count: int) -> list[dict[str, Any]]:
        return list(self.client.slowlog_get(count))

    def latency_latest(self) -> list[list[Any]]:
        return list(self.client.execute_command("LATENCY", "LATEST") or [])

    # =========================================================================
    # Value Readers
    # =========================================================================

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def hgetall(self, key: str) -> dict[str, str]:
        return dict(self.client.hgetall(key))

    def lrange(self, key: str) -> list[str]:
        return list(self.client.lrange(key, 0, -1))

    def smembers(self, key: str) -> set[str]:
        return set(self.client.smembers(key))

    def zrange_with_scores(self, key: str) -> list[tuple[str, float]]:
        return [(member, float(score)) for member, score in self.client.zrange(key, 0, -1, withscores=True)]

    def close(self) -> None:
        self.client.close()


def display_ttl(ttl: Optional[int]) -> TTLValue:
    """Map a raw TTL reply for display: -1 becomes "PERSIST", a failed fetch stays None."""
    if ttl is None:
        return None
    if ttl == TTL_NO_EXPIRY:
        return PERSIST
    return ttl


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


__all__ = ["RedisStore", "create_redis_client", "display_ttl"]
