"""Tests for application settings."""

import logging

import pytest
from pydantic import ValidationError

from src.settings import AppSettings, get_settings


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings fall back to their defaults."""
        for name in ("LOG_LEVEL", "LOG_JSON", "DEFAULT_MAX_RESULTS"):
            monkeypatch.delenv(f"RUNNING_TASKS_{name}", raising=False)

        settings = get_settings()

        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.default_max_results == 20

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefixed environment variables override defaults."""
        monkeypatch.setenv("RUNNING_TASKS_LOG_LEVEL", "debug")
        monkeypatch.setenv("RUNNING_TASKS_LOG_JSON", "false")
        monkeypatch.setenv("RUNNING_TASKS_DEFAULT_MAX_RESULTS", "5")

        settings = AppSettings()

        assert settings.log_level_value() == logging.DEBUG
        assert settings.log_json is False
        assert settings.default_max_results == 5

    def test_unknown_level_falls_back_to_info(self) -> None:
        """An unrecognized level name maps to INFO."""
        assert AppSettings(log_level="chatty").log_level_value() == logging.INFO

    def test_negative_max_rejected(self) -> None:
        """The default result bound cannot be negative."""
        with pytest.raises(ValidationError):
            AppSettings(default_max_results=-1)
