"""Single-key inspection: read a key's value in the shape of its type."""

from typing import Any, Callable

from core.cache import RedisStore
from core.logging import get_logger
from core.models import KeyInspection

logger = get_logger("services.inspect")


def _read_set(store: RedisStore, key: str) -> list[str]:
    return sorted(store.smembers(key))


def _read_zset(store: RedisStore, key: str) -> list[list[Any]]:
    return [[member, score] for member, score in store.zrange_with_scores(key)]


_READERS: dict[str, Callable[[RedisStore, str], Any]] = {
    "string": lambda store, key: store.get(key),
    "hash": lambda store, key: store.hgetall(key),
    "list": lambda store, key: store.lrange(key),
    "set": _read_set,
    "zset": _read_zset,
}


def inspect_key(store: RedisStore, key: str) -> KeyInspection:
    """
    Read one key.

    A missing key reports type "none" and no value. Store errors propagate.
    """
    key_type = store.key_type(key)
    reader = _READERS.get(key_type)
    value = reader(store, key) if reader else None

    logger.debug("key_inspected", key=key, type=key_type)
    return KeyInspection(key=key, type=key_type, value=value)


__all__ = ["inspect_key"]
