"""
Pytest fixtures for Redis Monitor tests.

FakeRedis implements the slice of the redis-py client API that RedisStore
uses, backed by plain dicts. Failures are injected per command (optionally per
key) and raise real redis.exceptions types.
"""

import fnmatch
from typing import Any, Optional

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError, ResponseError

from core.cache import RedisStore
from core.config import Settings

PREFIX = "pantheon-redis-json"


class FakeRedis:
    """
    In-memory stand-in for redis.Redis.

    SCAN walks keys in insertion order, `batch_size` keys per round trip, and
    applies MATCH after picking the batch, like the real server.
    """

    def __init__(self, batch_size: int = 2):
        self.batch_size = batch_size
        self.values: dict[str, tuple[str, Any]] = {}
        self.ttls: dict[str, int] = {}
        self.sizes: dict[str, int] = {}
        self.info_text = ""
        self.slowlog: list[dict[str, Any]] = []
        self.latency: list[list[Any]] = []
        self.db_size: Optional[int] = None
        self.calls: list[str] = []
        self.closed = False
        self._failures: dict[tuple[str, Optional[str]], RedisError] = {}

    # =========================================================================
    # Test Helpers
    # =========================================================================

    def add(
        self,
        key: str,
        value: Any = "",
        key_type: str = "string",
        ttl: int = -1,
        size: Optional[int] = None,
    ) -> None:
        self.values[key] = (key_type, value)
        self.ttls[key] = ttl
        if size is not None:
            self.sizes[key] = size

    def fail(self, command: str, key: Optional[str] = None, error: Optional[RedisError] = None) -> None:
        """Make `command` raise, for every key or only for `key`."""
        self._failures[(command, key)] = error or ResponseError(f"{command} failed")

    def _call(self, command: str, key: Optional[str] = None) -> None:
        self.calls.append(command)
        error = self._failures.get((command, key)) or self._failures.get((command, None))
        if error is not None:
            raise error

    # =========================================================================
    # redis-py Surface
    # =========================================================================

    def ping(self) -> bool:
        self._call("PING")
        return True

    def execute_command(self, *args: Any) -> Any:
        command = " ".join(str(arg) for arg in args)
        self._call(command)
        if command == "INFO":
            return self.info_text
        if command == "LATENCY LATEST":
            return self.latency
        raise ResponseError(f"unknown command '{command}'")

    def dbsize(self) -> int:
        self._call("DBSIZE")
        return len(self.values) if self.db_size is None else self.db_size

    def scan(self, cursor: int = 0, match: Optional[str] = None, count: Optional[int] = None):
        self._call("SCAN")
        keys = list(self.values)
        batch = keys[cursor:cursor + self.batch_size]
        next_cursor = cursor + self.batch_size
        if next_cursor >= len(keys):
            next_cursor = 0
        if match is not None:
            batch = [key for key in batch if fnmatch.fnmatchcase(key, match)]
        return next_cursor, batch

    def type(self, key: str) -> str:
        self._call("TYPE", key)
        return self.values[key][0] if key in self.values else "none"

    def ttl(self, key: str) -> int:
        self._call("TTL", key)
        return self.ttls.get(key, -1) if key in self.values else -2

    def memory_usage(self, key: str) -> Optional[int]:
        self._call("MEMORY USAGE", key)
        return self.sizes.get(key)

    def slowlog_len(self) -> int:
        self._call("SLOWLOG LEN")
        return len(self.slowlog)

    def slowlog_get(self, num: Optional[int] = None) -> list[dict[str, Any]]:
        self._call("SLOWLOG GET")
        return self.slowlog[:num]

    def get(self, key: str) -> Optional[str]:
        self._call("GET", key)
        return self.values[key][1] if key in self.values else None

    def hgetall(self, key: str) -> dict[str, str]:
        self._call("HGETALL", key)
        return dict(self.values[key][1])

    def lrange(self, key: str, start: int, end: int) -> list[str]:
        self._call("LRANGE", key)
        return list(self.values[key][1])

    def smembers(self, key: str) -> set[str]:
        self._call("SMEMBERS", key)
        return set(self.values[key][1])

    def zrange(self, key: str, start: int, end: int, withscores: bool = False):
        self._call("ZRANGE", key)
        ranked = sorted(self.values[key][1].items(), key=lambda item: item[1])
        if withscores:
            return ranked
        return [member for member, _ in ranked]

    def close(self) -> None:
        self.closed = True


INFO_TEXT = (
    "# Server\r\n"
    "redis_version:7.2.4\r\n"
    "redis_mode:standalone\r\n"
    "os:Linux 6.1.0 x86_64\r\n"
    "arch_bits:64\r\n"
    "tcp_port:6379\r\n"
    "config_file:\r\n"
    "uptime_in_seconds:86400\r\n"
    "\r\n"
    "# Clients\r\n"
    "connected_clients:12\r\n"
    "maxclients:10000\r\n"
    "\r\n"
    "# Memory\r\n"
    "used_memory:1048576\r\n"
    "used_memory_human:1.00M\r\n"
    "maxmemory_policy:allkeys-lru\r\n"
    "allocator_frag_ratio:1.25\r\n"
    "\r\n"
    "# Persistence\r\n"
    "aof_enabled:0\r\n"
    "\r\n"
    "# Stats\r\n"
    "instantaneous_ops_per_sec:42\r\n"
    "keyspace_hits:900\r\n"
    "keyspace_misses:100\r\n"
    "evicted_keys:7\r\n"
    "\r\n"
    "# Replication\r\n"
    "role:master\r\n"
    "connected_slaves:0\r\n"
    "\r\n"
    "# CPU\r\n"
    "used_cpu_sys:1.5\r\n"
    "\r\n"
    "# Cluster\r\n"
    "cluster_enabled:0\r\n"
    "\r\n"
    "# Keyspace\r\n"
    "db0:keys=5,expires=2,avg_ttl=0\r\n"
    "db1:keys=1,expires=0,avg_ttl=0\r\n"
)


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Empty fake client."""
    client = FakeRedis()
    client.info_text = INFO_TEXT
    return client


@pytest.fixture
def store(fake_redis) -> RedisStore:
    """Store adapter over the fake client."""
    return RedisStore(fake_redis)


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment and any .env file."""
    return Settings(
        _env_file=None,
        REDIS_URL="rediss://:secret@cache.example.com:6380/0",
        REDIS_PASSWORD=None,
        DRUPAL_REDIS_PREFIX=PREFIX,
        DRUPAL_SCAN_LIMIT=100,
        DRUPAL_TOP_LIMIT=25,
        CID_SEARCH_LIMIT=100,
        CID_SEARCH_MAX_ITERATIONS=10,
        TOP_KEYS_SAMPLE_COUNT=100,
        TOP_KEYS_LIMIT=3,
        SLOWLOG_ENTRIES=10,
    )


@pytest.fixture
def unreachable(fake_redis) -> FakeRedis:
    """Fake client whose PING and INFO fail like a refused connection."""
    fake_redis.fail("PING", error=RedisConnectionError("Connection refused"))
    fake_redis.fail("INFO", error=RedisConnectionError("Connection refused"))
    return fake_redis
