"""
Redis Monitor Core Library.

This package provides the core functionality for Redis Monitor, including
the store adapter, Drupal cache-key analysis, INFO parsing, services, and
logging.

Usage:
    # Store
    from core.cache import RedisStore, create_redis_client

    # Drupal cache keys
    from core.drupal import aggregate_cache_keys, search_by_cid

    # Config
    from core.config import get_settings, Settings

    # Logging
    from core.logging import get_logger, configure_logging
"""

__version__ = "1.0.0"

# Lazy imports to avoid circular dependencies
# Users should import directly from submodules:
#   from core.cache import RedisStore
#   from core.config import get_settings
#   from core.logging import get_logger
