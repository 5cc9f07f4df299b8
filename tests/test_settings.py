"""
Unit Tests for Settings Configuration

Tests for:
- Default values
- Loading settings from MPRIS_-prefixed environment variables
- Nested settings objects (BusSettings, SessionSettings)
- Custom validators (name prefix, log level)
- Settings caching and clearing
"""

import pytest
from pydantic import ValidationError

from mpris_session.config.settings import (
    BusSettings,
    SessionSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestBusSettings:
    """Unit tests for BusSettings."""

    def test_defaults(self):
        """Should create BusSettings with default values."""
        bus = BusSettings()

        assert bus.name_prefix == "org.mpris.MediaPlayer2"
        assert bus.timeout_s == 25.0

    def test_aliases(self):
        """Should accept the short aliases."""
        bus = BusSettings(prefix="com.example", timeout=3.0)

        assert bus.name_prefix == "com.example"
        assert bus.timeout_s == 3.0

    def test_empty_prefix_rejected(self):
        """Should raise ValidationError for a blank prefix."""
        with pytest.raises(ValidationError, match="prefix cannot be empty"):
            BusSettings(name_prefix="   ")

    @pytest.mark.parametrize("timeout", [0.0, -1.0, 301.0])
    def test_timeout_bounds(self, timeout):
        """Should raise ValidationError for out-of-range timeouts."""
        with pytest.raises(ValidationError):
            BusSettings(timeout_s=timeout)

    def test_frozen(self):
        """Should raise ValidationError on assignment."""
        bus = BusSettings()
        with pytest.raises(ValidationError):
            bus.timeout_s = 1.0


class TestSessionSettings:
    """Unit tests for SessionSettings."""

    def test_defaults(self):
        """Should default to continue-on-error enumeration."""
        assert SessionSettings().strict_enumeration is False


class TestSettings:
    """Unit tests for the root Settings container."""

    def test_defaults(self):
        """Should create Settings with default values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.bus == BusSettings()
        assert settings.session == SessionSettings()

    def test_load_from_environment_variables(self, monkeypatch):
        """Should load top-level settings from MPRIS_ variables."""
        monkeypatch.setenv("MPRIS_ENVIRONMENT", "production")
        monkeypatch.setenv("MPRIS_LOG_LEVEL", "warning")

        settings = Settings()

        assert settings.environment == "production"
        assert settings.log_level == "WARNING"

    def test_load_nested_settings_from_env(self, monkeypatch):
        """Should load nested settings with the __ delimiter."""
        monkeypatch.setenv("MPRIS_BUS__NAME_PREFIX", "com.example.Player")
        monkeypatch.setenv("MPRIS_BUS__TIMEOUT_S", "7.5")
        monkeypatch.setenv("MPRIS_SESSION__STRICT_ENUMERATION", "true")

        settings = Settings()

        assert settings.bus.name_prefix == "com.example.Player"
        assert settings.bus.timeout_s == 7.5
        assert settings.session.strict_enumeration is True

    def test_unprefixed_env_ignored(self, monkeypatch):
        """Should ignore variables without the MPRIS_ prefix."""
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        assert Settings().log_level == "INFO"

    def test_invalid_log_level(self, monkeypatch):
        """Should raise ValidationError for an unknown log level."""
        monkeypatch.setenv("MPRIS_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError, match="Invalid log level"):
            Settings()

    def test_invalid_environment(self):
        """Should raise ValidationError for an unknown environment."""
        with pytest.raises(ValidationError, match="Input should be"):
            Settings(environment="staging")


class TestSettingsCache:
    """Unit tests for get_settings caching."""

    def test_cached_instance(self):
        """Should return the same cached instance."""
        assert get_settings() is get_settings()

    def test_clear_cache_reloads(self, monkeypatch):
        """Should reload settings after clearing the cache."""
        first = get_settings()
        monkeypatch.setenv("MPRIS_LOG_LEVEL", "ERROR")

        assert get_settings() is first
        clear_settings_cache()

        reloaded = get_settings()
        assert reloaded is not first
        assert reloaded.log_level == "ERROR"
