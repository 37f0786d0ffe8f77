"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from core.config import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Tests for defaults and validation."""

    def test_defaults(self, monkeypatch):
        """Test the documented defaults."""
        for name in ("DRUPAL_REDIS_PREFIX", "DRUPAL_SCAN_LIMIT", "DRUPAL_TOP_LIMIT", "CID_SEARCH_LIMIT"):
            monkeypatch.delenv(name, raising=False)

        settings = _settings()

        assert settings.drupal_redis_prefix == "pantheon-redis-json"
        assert settings.drupal_scan_limit == 3000
        assert settings.drupal_top_limit == 25
        assert settings.cid_search_limit == 100
        assert settings.cid_search_max_iterations == 10

    def test_env_variables(self, monkeypatch):
        """Test loading from the environment."""
        monkeypatch.setenv("DRUPAL_SCAN_LIMIT", "500")
        monkeypatch.setenv("REDIS_TLS", "true")

        settings = _settings()

        assert settings.drupal_scan_limit == 500
        assert settings.redis_tls is True

    @pytest.mark.parametrize("name", ["DRUPAL_SCAN_LIMIT", "DRUPAL_TOP_LIMIT", "CID_SEARCH_LIMIT", "SCAN_COUNT"])
    def test_limits_must_be_positive(self, name):
        """Test that zero limits are rejected."""
        with pytest.raises(ValidationError):
            _settings(**{name: 0})

    def test_prefix_normalized(self):
        """Test that whitespace and a trailing colon are stripped."""
        assert _settings(DRUPAL_REDIS_PREFIX="  site-cache: ").drupal_redis_prefix == "site-cache"

    def test_empty_prefix_rejected(self):
        """Test that an empty prefix is rejected."""
        with pytest.raises(ValidationError):
            _settings(DRUPAL_REDIS_PREFIX=" : ")

    def test_cors_origins_list(self):
        """Test comma-separated origins."""
        settings = _settings(CORS_ALLOWED_ORIGINS="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


class TestConnectionSummary:
    """Tests for the connection description."""

    def test_host_and_port(self, monkeypatch):
        """Test host/port mode."""
        monkeypatch.delenv("REDIS_URL", raising=False)
        settings = _settings(REDIS_HOST="redis.internal", REDIS_PORT=6390, REDIS_TLS=True)
        assert settings.connection_summary() == {"host": "redis.internal", "port": 6390, "tls": True}

    def test_url_default_port(self):
        """Test a URL without an explicit port."""
        settings = _settings(REDIS_URL="redis://cache.example.com/0", REDIS_TLS=False)
        assert settings.connection_summary() == {"host": "cache.example.com", "port": 6379, "tls": False}

    def test_url_malformed_port_falls_back(self):
        """Test that an unparseable URL port falls back to host/port settings."""
        settings = _settings(
            REDIS_URL="redis://cache.example.com:notaport/0",
            REDIS_HOST="redis.internal",
            REDIS_PORT=6390,
            REDIS_TLS=False,
        )
        assert settings.connection_summary() == {"host": "redis.internal", "port": 6390, "tls": False}

    def test_sanitized_without_password(self, monkeypatch):
        """Test that unset credentials display as empty strings."""
        monkeypatch.delenv("REDIS_PASSWORD", raising=False)
        settings = _settings(REDIS_URL="redis://cache.example.com:6379/0")
        config = settings.sanitized()
        assert config["REDIS_URL"] == "redis://cache.example.com:6379/0"
        assert config["REDIS_PASSWORD"] == ""
