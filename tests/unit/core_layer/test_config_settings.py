"""
Unit Tests for Configuration Settings

Tests the settings loading, validation, and default values.
"""

import pydantic
import pytest

import src.core.config.settings as settings_module
from src.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsDefaults:
    """Test Settings defaults and nested views."""

    def test_cache_settings_have_valid_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.cache.ENABLE_CACHING is True
        assert settings.cache.CACHE_DEFAULT_TTL == 300
        assert settings.cache.CACHE_MAX_SIZE == 1000
        assert settings.cache.CACHE_CLEANUP_INTERVAL == 60
        assert settings.cache.CACHE_COMPRESSION_THRESHOLD == 1024

    def test_admin_and_health_excluded_from_response_cache(self):
        excluded = Settings(_env_file=None).cache.CACHE_EXCLUDED_PATHS

        assert "/api/v1/admin" in excluded
        assert "/api/v1/health" in excluded

    def test_app_settings(self):
        settings = Settings(_env_file=None)

        assert settings.app.API_BASE_PATH == "/api/v1"
        assert settings.app.SLOW_REQUEST_THRESHOLD > 0

    def test_nested_views_reflect_overrides(self):
        settings = Settings(_env_file=None, CACHE_MAX_SIZE=42, LOG_FORMAT="console")

        assert settings.cache.CACHE_MAX_SIZE == 42
        assert settings.logging.LOG_FORMAT == "console"


@pytest.mark.unit
class TestSettingsValidation:
    """Test field validation."""

    def test_log_level_is_uppercased(self):
        assert Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, LOG_LEVEL="verbose")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, LOG_FORMAT="xml")

    def test_environment_variables_override_defaults(self, monkeypatch):
        monkeypatch.setenv("CACHE_DEFAULT_TTL", "120")
        monkeypatch.setenv("ENABLE_CACHING", "false")

        settings = Settings(_env_file=None)

        assert settings.cache.CACHE_DEFAULT_TTL == 120
        assert settings.cache.ENABLE_CACHING is False


@pytest.mark.unit
class TestSettingsSingleton:
    """Test get_settings / reload_settings."""

    @pytest.fixture(autouse=True)
    def restore_singleton(self):
        saved = settings_module._settings
        yield
        settings_module._settings = saved

    def test_get_settings_returns_same_instance(self):
        assert get_settings() is get_settings()

    def test_reload_settings_replaces_instance(self):
        first = get_settings()

        second = reload_settings()

        assert second is not first
        assert get_settings() is second
