"""Tests for settings and logging configuration."""

import pytest
import structlog
from pydantic import ValidationError

from ruleset_core.config import Settings, get_settings
from ruleset_core.log import configure_logging


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """Defaults match the core rules."""
        settings = Settings()
        assert settings.proficiency_variant == "with_level"
        assert settings.proficiency_trained_modifier == 2
        assert settings.proficiency_legendary_modifier == 8
        assert settings.automatic_bonus_variant == "none"
        assert settings.log_format == "console"

    def test_environment_override(self, monkeypatch):
        """RULESET_ variables override the defaults."""
        monkeypatch.setenv("RULESET_AUTOMATIC_BONUS_VARIANT", "rules_as_written")
        monkeypatch.setenv("RULESET_LOG_LEVEL", "DEBUG")
        settings = get_settings()
        assert settings.automatic_bonus_variant == "rules_as_written"
        assert settings.log_level == "DEBUG"

    def test_invalid_variant(self, monkeypatch):
        """An unknown variant name fails validation."""
        monkeypatch.setenv("RULESET_PROFICIENCY_VARIANT", "sometimes")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        """get_settings returns the same instance until the cache is cleared."""
        assert get_settings() is get_settings()


class TestConfigureLogging:
    """Tests for structlog setup."""

    @pytest.mark.parametrize("log_format", ["console", "json"])
    def test_configure(self, log_format):
        """Both renderers accept a log call after configuration."""
        configure_logging(Settings(log_format=log_format, log_level="WARNING"))
        try:
            structlog.get_logger("test").warning("configured", log_format=log_format)
        finally:
            structlog.reset_defaults()
