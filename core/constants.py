"""
Application constants for Redis Monitor.

Contains store sentinels and the Drupal cache-key vocabulary.
"""

# =============================================================================
# Store Sentinels
# =============================================================================

# Redis TTL reply for a key without expiry (-2 means the key does not exist)
TTL_NO_EXPIRY = -1

# Marker reported in place of TTL -1
PERSIST = "PERSIST"

# SCAN starts and finishes at cursor 0
SCAN_START_CURSOR = 0

# Reported when TYPE could not be read
TYPE_UNKNOWN = "unknown"

# =============================================================================
# Drupal Cache Keys
# =============================================================================

UNKNOWN_BIN = "unknown"
NO_LANGUAGE = "n/a"
DYNAMIC_PAGE_CACHE_BIN = "dynamic_page_cache"
ALL_BINS = "all"

# Context labels read from key suffixes like "[route]=entity.node.canonical"
LABEL_ROUTE = "route"
LABEL_THEME = "theme"
LABEL_URL = "url"
LABEL_URL_PATH = "url.path"
LABEL_LANGUAGE_CONTENT = "languages:language_content"
LABEL_LANGUAGE_INTERFACE = "languages:language_interface"
LABEL_ROLE_ANONYMOUS = "user.roles:anonymous"
LABEL_ROLE_AUTHENTICATED = "user.roles:authenticated"

# Only this exact literal counts as a set role flag
FLAG_TRUE = "true"

DRUPAL_REPORT_NOTE = "Sizes use MEMORY USAGE where permitted; TTL excludes PERSIST/-2."

CONFIG_REPORT_NOTE = (
    "Shared vs dedicated cannot be reliably detected via INFO; check your provider plan. "
    "Values shown are from INFO and env (sanitized)."
)

# =============================================================================
# Metrics
# =============================================================================

# SCAN COUNT hint used while sampling the whole keyspace for top keys
TOP_KEYS_SCAN_COUNT = 500

INFO_SECTIONS = ("Server", "Clients", "Memory", "Stats", "CPU", "Keyspace")
