"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()

For constants, import from core.constants:
    from core.constants import PERSIST, DYNAMIC_PAGE_CACHE_BIN
"""

from functools import lru_cache
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MASKED_VALUE = "***"


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Connection:
        - REDIS_URL wins over REDIS_HOST / REDIS_PORT when set
    Drupal cache scanning:
        - DRUPAL_REDIS_PREFIX, DRUPAL_SCAN_LIMIT, DRUPAL_TOP_LIMIT
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = Field(default="Redis Monitor", validation_alias="APP_NAME")
    api_prefix: str = Field(default="/api", validation_alias="API_PREFIX")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    # Redis
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_username: Optional[str] = Field(default=None, validation_alias="REDIS_USERNAME")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")
    redis_tls: bool = Field(default=False, validation_alias="REDIS_TLS")
    redis_socket_timeout: float = Field(default=5.0, validation_alias="REDIS_SOCKET_TIMEOUT")

    # Drupal cache keys
    drupal_redis_prefix: str = Field(default="pantheon-redis-json", validation_alias="DRUPAL_REDIS_PREFIX")
    drupal_scan_limit: int = Field(default=3000, validation_alias="DRUPAL_SCAN_LIMIT")
    drupal_top_limit: int = Field(default=25, validation_alias="DRUPAL_TOP_LIMIT")

    # CID search
    cid_search_limit: int = Field(default=100, validation_alias="CID_SEARCH_LIMIT")
    cid_search_max_iterations: int = Field(default=10, validation_alias="CID_SEARCH_MAX_ITERATIONS")

    # Metrics sampling
    scan_count: int = Field(default=1000, validation_alias="SCAN_COUNT")
    top_keys_sample_count: int = Field(default=2000, validation_alias="TOP_KEYS_SAMPLE_COUNT")
    top_keys_limit: int = Field(default=25, validation_alias="TOP_KEYS_LIMIT")
    slowlog_entries: int = Field(default=25, validation_alias="SLOWLOG_ENTRIES")

    @field_validator(
        "drupal_scan_limit",
        "drupal_top_limit",
        "cid_search_limit",
        "cid_search_max_iterations",
        "scan_count",
        "top_keys_sample_count",
        "top_keys_limit",
        "slowlog_entries",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Scan budgets and limits must be positive."""
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("drupal_redis_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """Strip whitespace and a trailing separator from the key prefix."""
        v = v.strip().rstrip(":")
        if not v:
            raise ValueError("DRUPAL_REDIS_PREFIX cannot be empty")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def connection_summary(self) -> dict:
        """
        Describe where the store connection points, without credentials.

        REDIS_URL takes precedence; a rediss:// scheme implies TLS.
        """
        if self.redis_url:
            parsed = urlparse(self.redis_url)
            try:
                port = parsed.port
            except ValueError:
                # Malformed port: describe the host/port settings instead
                parsed = None
            if parsed is not None and parsed.hostname:
                return {
                    "host": parsed.hostname,
                    "port": port or 6379,
                    "tls": parsed.scheme == "rediss" or self.redis_tls,
                }
        return {
            "host": self.redis_host or "unknown",
            "port": self.redis_port,
            "tls": self.redis_tls,
        }

    def sanitized(self) -> dict[str, str]:
        """Effective connection and scanning options, safe to display."""
        return {
            "REDIS_URL": _mask_url_password(self.redis_url) if self.redis_url else "",
            "REDIS_HOST": self.redis_host,
            "REDIS_PORT": str(self.redis_port),
            "REDIS_DB": str(self.redis_db),
            "REDIS_USERNAME": self.redis_username or "",
            "REDIS_PASSWORD": MASKED_VALUE if self.redis_password else "",
            "REDIS_TLS": str(self.redis_tls).lower(),
            "DRUPAL_REDIS_PREFIX": self.drupal_redis_prefix,
            "DRUPAL_SCAN_LIMIT": str(self.drupal_scan_limit),
            "DRUPAL_TOP_LIMIT": str(self.drupal_top_limit),
            "CID_SEARCH_LIMIT": str(self.cid_search_limit),
            "CID_SEARCH_MAX_ITERATIONS": str(self.cid_search_max_iterations),
            "TOP_KEYS_SAMPLE_COUNT": str(self.top_keys_sample_count),
            "TOP_KEYS_LIMIT": str(self.top_keys_limit),
        }


def _mask_url_password(url: str) -> str:
    parsed = urlparse(url)
    if not parsed.password:
        return url
    netloc = parsed.netloc.replace(f":{parsed.password}@", f":{MASKED_VALUE}@", 1)
    return parsed._replace(netloc=netloc).geturl()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings", "MASKED_VALUE"]
