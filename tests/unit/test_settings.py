"""
Unit tests for application settings.

Tests defaults and environment variable overrides.
"""

import pytest

from src.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults bind all interfaces on port 8080."""
        for name in ("HOST", "PORT", "LOG_LEVEL", "DEBUG"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.host == "0.0.0.0"
        assert settings.port == 8080
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_port_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PORT overrides the listening port."""
        monkeypatch.setenv("PORT", "9090")
        assert Settings(_env_file=None).port == 9090

    def test_env_names_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variable names are matched case-insensitively."""
        monkeypatch.setenv("log_level", "DEBUG")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_get_settings_is_cached(self) -> None:
        """get_settings returns the same instance."""
        assert get_settings() is get_settings()
