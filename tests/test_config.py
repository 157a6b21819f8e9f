"""Tests for configuration settings."""

import pytest

from reviewmate.config import (
    PriorityConfig,
    Settings,
    SMTPConfig,
    get_settings,
)


class TestSettings:
    """Tests for Settings class."""

    def test_settings_defaults(self):
        """Test default values are correct."""
        settings = Settings(
            _env_file=None,  # Don't load .env
        )

        assert settings.database_url == "sqlite+aiosqlite:///./reviewmate.db"
        assert settings.github_token_secret == ""
        assert settings.jwt_secret == ""
        assert settings.environment == "development"
        assert settings.log_level == "INFO"
        assert settings.server.port == 5001

    def test_settings_from_env(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
        monkeypatch.setenv("GITHUB_TOKEN_SECRET", "vault-secret")
        monkeypatch.setenv("JWT_SECRET", "jwt-secret")
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./test.db"
        assert settings.github_token_secret == "vault-secret"
        assert settings.jwt_secret == "jwt-secret"
        assert settings.environment == "production"
        assert settings.log_level == "DEBUG"

    def test_nested_settings_from_env(self, monkeypatch):
        """Nested components use the __ delimiter."""
        monkeypatch.setenv("SMTP__HOST", "smtp.example.com")
        monkeypatch.setenv("SMTP__PORT", "587")
        monkeypatch.setenv("PRIORITY__HIGH_THRESHOLD", "500")
        monkeypatch.setenv("SERVER__PORT", "8080")

        settings = Settings(_env_file=None)

        assert settings.smtp.host == "smtp.example.com"
        assert settings.smtp.port == 587
        assert settings.priority.high_threshold == 500
        assert settings.server.port == 8080

    def test_settings_environment_validation(self, monkeypatch):
        """Test that invalid environment value is rejected."""
        monkeypatch.setenv("ENVIRONMENT", "invalid")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_settings_log_level_validation(self, monkeypatch):
        """Test that invalid log level is rejected."""
        monkeypatch.setenv("LOG_LEVEL", "INVALID")

        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_settings_case_insensitive(self, monkeypatch):
        """Test that env var names are case-insensitive."""
        monkeypatch.setenv("database_url", "sqlite+aiosqlite:///./lower.db")

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./lower.db"


class TestPriorityConfig:
    """Tests for priority thresholds."""

    def test_defaults(self):
        config = PriorityConfig()
        assert config.high_threshold == 200
        assert config.medium_threshold == 50

    def test_medium_must_be_below_high(self):
        with pytest.raises(ValueError):
            PriorityConfig(high_threshold=100, medium_threshold=100)


class TestSMTPConfig:
    """Tests for SMTP configuration completeness."""

    def test_empty_is_not_configured(self):
        assert not SMTPConfig().is_configured

    def test_partial_is_not_configured(self):
        config = SMTPConfig(host="smtp.example.com", port=587, username="bot")
        assert not config.is_configured

    def test_complete_is_configured(self):
        config = SMTPConfig(
            host="smtp.example.com",
            port=587,
            username="bot",
            password="secret",
            from_address="bot@example.com",
        )
        assert config.is_configured


class TestGetSettings:
    """Tests for get_settings function."""

    def test_get_settings_returns_settings(self):
        """Test get_settings returns a Settings instance."""
        assert isinstance(get_settings(), Settings)

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()
