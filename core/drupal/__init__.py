"""
Drupal cache-key analysis.

Usage:
    from core.drupal import aggregate_cache_keys, search_by_cid

    report = aggregate_cache_keys(store, "pantheon-redis-json", scan_limit=3000, top_limit=25)
    matches = search_by_cid(store, "pantheon-redis-json", "entity_view", bin="render")
"""

from core.drupal.aggregation import CacheAggregator, aggregate_cache_keys
from core.drupal.keys import (
    CacheKeyRow,
    build_search_pattern,
    decode_key,
    extract_cid_and_bin,
    parse_context,
)
from core.drupal.search import search_by_cid

__all__ = [
    "CacheAggregator",
    "CacheKeyRow",
    "aggregate_cache_keys",
    "build_search_pattern",
    "decode_key",
    "extract_cid_and_bin",
    "parse_context",
    "search_by_cid",
]
