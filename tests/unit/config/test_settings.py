"""
Tests for environment-driven settings.
"""

import logging

import pytest
from pydantic import ValidationError

from fuzzinfer import operation as op
from fuzzinfer.config.settings import (
    EngineSettings,
    LoggingSettings,
    clear_settings_cache,
    get_engine_settings,
)
from fuzzinfer.defuzzifier import Centroid


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestEngineSettings:
    """Tests for the numeric defaults of the engine."""

    def test_defaults(self, monkeypatch):
        """Test the built-in defaults."""
        for name in ("FUZZINFER_RESOLUTION", "FUZZINFER_MACHINE_EPSILON", "FUZZINFER_DECIMALS"):
            monkeypatch.delenv(name, raising=False)
        settings = EngineSettings()
        assert settings.resolution == 100
        assert settings.machine_epsilon == 1e-6
        assert settings.decimals == 3

    def test_environment_overrides(self, monkeypatch):
        """Test that environment variables change the engine defaults."""
        monkeypatch.setenv("FUZZINFER_RESOLUTION", "250")
        monkeypatch.setenv("FUZZINFER_DECIMALS", "1")

        assert get_engine_settings().resolution == 250
        assert Centroid().resolution == 250
        assert op.str_value(0.75) == "0.8"

    def test_cached(self):
        """Test that settings are read once until the cache is cleared."""
        assert get_engine_settings() is get_engine_settings()

    def test_invalid_resolution(self, monkeypatch):
        """Test that non-positive resolutions are rejected."""
        monkeypatch.setenv("FUZZINFER_RESOLUTION", "0")
        with pytest.raises(ValidationError):
            EngineSettings()


class TestLoggingSettings:
    """Tests for logging settings."""

    def test_level(self, monkeypatch):
        """Test that level names are normalised."""
        monkeypatch.setenv("FUZZINFER_LOGGING_LEVEL", "warning")
        settings = LoggingSettings()
        assert settings.level == "WARNING"
        assert settings.console_level() == logging.WARNING

    def test_unknown_level(self, monkeypatch):
        """Test that unknown level names are rejected."""
        monkeypatch.setenv("FUZZINFER_LOGGING_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            LoggingSettings()
