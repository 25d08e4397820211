"""
Tests for notifier configuration.
"""

import pytest
from unittest.mock import patch
from src.putnotif.config import (
    NotifierConfig, parse_service, resolve_hostname, DATA_MAX_LEN, HOSTNAME_MAX_LEN,
)
from src.putnotif.notifier import build_parser
from src.putnotif.exceptions import (
    ConfigurationError, InvalidHostnameError, InvalidServiceError, NotifierError,
)


class TestParseService:
    """Test cases for plugin/type parsing."""

    def test_default_service(self):
        """Test the default identifier."""
        assert parse_service("stdout/prv") == ("stdout", "prv")

    def test_split_at_first_slash(self):
        """Test that the type may contain further slashes."""
        assert parse_service("app/log/err") == ("app", "log/err")

    def test_missing_slash(self):
        """Test an identifier without slash."""
        with pytest.raises(InvalidServiceError, match="no `/` found in `stdout`"):
            parse_service("stdout")

    @pytest.mark.parametrize("service", ["/prv", "stdout/", "/"])
    def test_empty_part(self, service):
        """Test empty plugin or type."""
        with pytest.raises(InvalidServiceError, match="invalid service"):
            parse_service(service)

    def test_length_limits(self):
        """Test the 63 byte maximum of each part."""
        longest = "p" * (DATA_MAX_LEN - 1)
        assert parse_service(f"{longest}/{longest}") == (longest, longest)

        with pytest.raises(InvalidServiceError):
            parse_service("p" * DATA_MAX_LEN + "/t")
        with pytest.raises(InvalidServiceError):
            parse_service("p/" + "t" * DATA_MAX_LEN)

    def test_length_counted_in_bytes(self):
        """Test that multibyte characters count per byte."""
        with pytest.raises(InvalidServiceError):
            parse_service("é" * 32 + "/t")


class TestResolveHostname:
    """Test cases for hostname handling."""

    def test_supplied_hostname(self):
        """Test that a short hostname is kept."""
        assert resolve_hostname("web01") == "web01"

    def test_longest_hostname(self):
        """Test the 15 byte maximum."""
        name = "h" * (HOSTNAME_MAX_LEN - 1)
        assert resolve_hostname(name) == name

    def test_hostname_too_long(self):
        """Test rejection of 16 bytes."""
        with pytest.raises(InvalidHostnameError, match="invalid hostname"):
            resolve_hostname("h" * HOSTNAME_MAX_LEN)

    @patch("src.putnotif.config.socket.gethostname", return_value="system-host")
    def test_default_to_system_hostname(self, mock_gethostname):
        """Test fallback when no hostname is given."""
        assert resolve_hostname("") == "system-host"
        assert resolve_hostname(None) == "system-host"
        mock_gethostname.assert_called()


class TestNotifierConfig:
    """Test cases for NotifierConfig class."""

    def test_defaults(self):
        """Test default settings."""
        config = NotifierConfig(hostname="web01")
        assert config.plugin == "stdout"
        assert config.ctype == "prv"
        assert config.service == "stdout/prv"
        assert config.limit == 0
        assert config.window == 1
        assert config.max_event_length == 245
        assert config.max_event_id == 99
        assert config.write_buffer == "block"
        assert config.verbose is False

    def test_from_args(self):
        """Test building from parsed arguments."""
        args = build_parser().parse_args(
            ["-s", "app/log", "-H", "db1", "-l", "5", "-w", "2", "-M", "50", "-I", "7", "-v"]
        )
        config = NotifierConfig.from_args(args)

        assert (config.plugin, config.ctype) == ("app", "log")
        assert config.hostname == "db1"
        assert config.limit == 5
        assert config.window == 2
        assert config.max_event_length == 50
        assert config.max_event_id == 7
        assert config.verbose is True

    def test_from_args_invalid_service(self):
        """Test that a bad service is reported as configuration error."""
        args = build_parser().parse_args(["-s", "bad", "-H", "db1"])
        with pytest.raises(ConfigurationError):
            NotifierConfig.from_args(args)

    @pytest.mark.parametrize("settings", [
        {"max_event_length": 0},
        {"max_event_id": 0},
        {"limit": -1},
        {"window": -1},
        {"plugin": ""},
        {"ctype": "t" * DATA_MAX_LEN},
    ])
    def test_invalid_settings(self, settings):
        """Test rejection of values the loop cannot work with."""
        with pytest.raises(ConfigurationError):
            NotifierConfig(hostname="web01", **settings)

    def test_error_hierarchy(self):
        """Test exception base classes."""
        assert issubclass(InvalidHostnameError, ConfigurationError)
        assert issubclass(InvalidServiceError, ConfigurationError)
        assert issubclass(ConfigurationError, NotifierError)

    def test_repr(self):
        """Test configuration string representation."""
        repr_str = repr(NotifierConfig(hostname="web01"))
        assert "stdout/prv" in repr_str
        assert "web01" in repr_str
