"""
Tests for INFO text parsing.
"""

import pytest

from core.parsing import coerce_value, parse_info


class TestParseInfo:
    """Tests for section and field parsing."""

    def test_crlf_section(self):
        """Test a single CRLF-terminated section."""
        assert parse_info("# Memory\r\nused_memory:100\r\n") == {"Memory": {"used_memory": 100}}

    def test_multiple_sections(self):
        """Test that fields land in their own section."""
        text = "# Server\nredis_version:7.2.4\n\n# Clients\nconnected_clients:3\n"
        assert parse_info(text) == {
            "Server": {"redis_version": "7.2.4"},
            "Clients": {"connected_clients": 3},
        }

    def test_split_on_first_colon(self):
        """Test keyspace lines whose values contain separators."""
        info = parse_info("# Keyspace\ndb0:keys=5,expires=2,avg_ttl=0\n")
        assert info["Keyspace"]["db0"] == "keys=5,expires=2,avg_ttl=0"

    def test_values_with_colons_are_kept_whole(self):
        """Test that a value keeps every colon after the first."""
        info = parse_info("# Server\nexecutable:/usr/bin/redis:server\n")
        assert info["Server"]["executable"] == "/usr/bin/redis:server"

    def test_default_section_only_when_used(self):
        """Test fields before the first section header."""
        assert parse_info("# Server\nuptime:1\n") == {"Server": {"uptime": 1}}
        assert parse_info("uptime:1\n# Server\n") == {"default": {"uptime": 1}, "Server": {}}

    def test_bare_marker_ignored(self):
        """Test that "#" alone does not open a section."""
        assert parse_info("# Server\n#\nuptime:1\n") == {"Server": {"uptime": 1}}

    def test_reopened_section_starts_fresh(self):
        """Test that a repeated header resets the section."""
        assert parse_info("# Stats\na:1\n# Stats\nb:2\n") == {"Stats": {"b": 2}}

    def test_malformed_lines_skipped(self):
        """Test lines without a colon or key."""
        assert parse_info("# Server\nno colon here\n:value\nok:1\n") == {"Server": {"ok": 1}}

    def test_section_name_trimmed(self):
        """Test whitespace around section names."""
        assert parse_info("#   Memory  \nused_memory:1\n") == {"Memory": {"used_memory": 1}}

    @pytest.mark.parametrize("text", ["", "\n\n", "###", "::::", "\x00\r\n#\r\n", "a" * 1000])
    def test_never_raises(self, text):
        """Test arbitrary input."""
        assert isinstance(parse_info(text), dict)


class TestCoerceValue:
    """Tests for numeric conversion."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("100", 100),
            ("-5", -5),
            ("0", 0),
            ("1.5", 1.5),
            ("-2e3", -2000.0),
            (".5", 0.5),
        ],
    )
    def test_numeric(self, raw, expected):
        """Test plain numeric literals."""
        value = coerce_value(raw)
        assert value == expected
        assert type(value) is type(expected)

    @pytest.mark.parametrize("raw", ["nan", "inf", "-inf", "0x10", "", "1.00M", "allkeys-lru", "1e999"])
    def test_text(self, raw):
        """Test values that stay text."""
        assert coerce_value(raw) == raw
