"""Tests for application settings."""

from src.config.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.trending_default_limit == 10
        assert settings.metrics_port == 8000
        assert not settings.is_production

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("TRENDING_DEFAULT_LIMIT", "25")
        settings = Settings()
        assert settings.is_production
        assert settings.trending_default_limit == 25

    def test_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()
