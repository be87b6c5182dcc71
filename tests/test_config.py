"""Tests for respond configuration."""

import pytest
from pydantic import ValidationError

from respond.config import RespondConfig, get_config, load_config, set_config


class TestRespondConfig:
    """Test the configuration model."""

    def test_defaults(self):
        """Test default values."""
        config = RespondConfig()

        assert config.log_level == "warning"
        assert config.ensure_ascii is False
        assert config.trust_forwarded_proto is False

    def test_log_level_normalized(self):
        """Test that log levels are case-insensitive."""
        assert RespondConfig(log_level=" DEBUG ").log_level == "debug"

    def test_invalid_log_level(self):
        """Test that unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            RespondConfig(log_level="verbose")


class TestLoadConfig:
    """Test loading configuration from the environment."""

    def test_load_from_environment(self, monkeypatch):
        """Test that environment variables are honoured."""
        monkeypatch.setenv("RESPOND_LOG_LEVEL", "info")
        monkeypatch.setenv("RESPOND_JSON_ENSURE_ASCII", "true")
        monkeypatch.setenv("RESPOND_TRUST_FORWARDED_PROTO", "1")

        config = load_config()

        assert config.log_level == "info"
        assert config.ensure_ascii is True
        assert config.trust_forwarded_proto is True

    def test_invalid_level_falls_back(self, monkeypatch, caplog):
        """Test that an invalid level is logged and replaced."""
        monkeypatch.setenv("RESPOND_LOG_LEVEL", "loud")

        with caplog.at_level("WARNING", logger="respond.config"):
            config = load_config()

        assert config.log_level == "warning"
        assert "Invalid log level: loud" in caplog.text

    def test_unset_flags_are_false(self, monkeypatch):
        """Test flag defaults when variables are absent."""
        monkeypatch.delenv("RESPOND_JSON_ENSURE_ASCII", raising=False)
        monkeypatch.delenv("RESPOND_TRUST_FORWARDED_PROTO", raising=False)

        config = load_config()

        assert config.ensure_ascii is False
        assert config.trust_forwarded_proto is False


class TestProcessConfig:
    """Test the process-wide configuration holder."""

    def test_get_config_is_cached(self):
        """Test that get_config returns the same instance."""
        assert get_config() is get_config()

    def test_set_config(self):
        """Test replacing the configuration."""
        custom = RespondConfig(ensure_ascii=True)
        set_config(custom)

        assert get_config() is custom

    def test_reset_reloads(self, monkeypatch):
        """Test that set_config(None) reloads from the environment."""
        set_config(RespondConfig(log_level="error"))
        monkeypatch.setenv("RESPOND_LOG_LEVEL", "debug")
        set_config(None)

        assert get_config().log_level == "debug"
