"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Settings
- The store adapter over the application's redis client
"""

import redis
from fastapi import Depends, Request

from core.cache import RedisStore
from core.config import Settings, get_settings

# =============================================================================
# Store Dependencies
# =============================================================================


def get_redis_client(request: Request) -> redis.Redis:
    """Redis client created at application startup."""
    return request.app.state.redis


def get_store(client: redis.Redis = Depends(get_redis_client)) -> RedisStore:
    """Request-scoped store adapter."""
    return RedisStore(client)


__all__ = [
    "Settings",
    "get_redis_client",
    "get_settings",
    "get_store",
]
