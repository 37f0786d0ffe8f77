"""
Tests for the server configuration summary and settings display.
"""

from core.models import ConfigReport, ErrorKind, ErrorReport
from core.services import sanitized_settings, summarize_server


class TestSummarizeServer:
    """Tests for the curated INFO summary."""

    def test_curated_fields(self, store, settings):
        """Test the fields picked from each section."""
        report = summarize_server(store, settings)

        assert isinstance(report, ConfigReport)
        assert report.server["redis_version"] == "7.2.4"
        assert report.server["config_file"] is None
        assert report.server["run_id"] is None
        assert report.memory["used_memory_human"] == "1.00M"
        assert report.memory["evicted_keys"] == 7
        assert report.clients == {"connected_clients": 12, "maxclients": 10000}
        assert report.replication["role"] == "master"
        assert report.cluster == {"cluster_enabled": 0}
        assert report.persistence["aof_enabled"] == 0
        assert report.stats["keyspace_misses"] == 100
        assert report.keyspace == {"databases": 2}

    def test_connection_from_url(self, store, settings):
        """Test that REDIS_URL wins and rediss implies TLS."""
        connection = summarize_server(store, settings).connection
        assert (connection.host, connection.port, connection.tls) == ("cache.example.com", 6380, True)

    def test_dbsize_failure(self, fake_redis, store, settings):
        """Test that DBSIZE failure reports 0."""
        fake_redis.fail("DBSIZE")
        assert summarize_server(store, settings).dbsize == 0

    def test_note(self, store, settings):
        """Test the hosting note."""
        assert "Shared vs dedicated" in summarize_server(store, settings).note

    def test_unreachable(self, unreachable, store, settings):
        """Test that a failed PING yields a connectivity error."""
        report = summarize_server(store, settings)
        assert isinstance(report, ErrorReport)
        assert report.kind == ErrorKind.CONNECTIVITY


class TestSanitizedSettings:
    """Tests for the settings display."""

    def test_password_masked_in_url(self, settings):
        """Test that a URL password never appears."""
        config = sanitized_settings(settings).config

        assert config["REDIS_URL"] == "rediss://:***@cache.example.com:6380/0"
        assert "secret" not in str(config)
        assert config["DRUPAL_REDIS_PREFIX"] == "pantheon-redis-json"

    def test_password_field_masked(self, settings):
        """Test REDIS_PASSWORD masking."""
        settings.redis_password = "hunter2"
        assert sanitized_settings(settings).config["REDIS_PASSWORD"] == "***"
