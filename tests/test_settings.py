"""Tests for environment-driven configuration."""

import pytest
from pathlib import Path

from pydantic import ValidationError

from finanztracker.config import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "FINANZ_STORAGE_DATA_DIR",
        "FINANZ_STORAGE_SLOT_NAME",
        "FINANZ_LOG_LEVEL",
        "FINANZ_CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for storage slot configuration."""

    def test_defaults(self):
        settings = StorageSettings()

        assert settings.slot_name == "finanz_transactions"
        assert settings.slot_path == Path(".finanztracker") / "finanz_transactions.json"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FINANZ_STORAGE_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("FINANZ_STORAGE_SLOT_NAME", "haushalt")

        assert StorageSettings().slot_path == tmp_path / "haushalt.json"

    def test_rejects_path_in_slot_name(self):
        with pytest.raises(ValidationError, match="Invalid slot name"):
            StorageSettings(slot_name="../elsewhere")


class TestAppSettings:
    """Tests for application settings."""

    def test_defaults(self):
        settings = AppSettings()

        assert settings.currency_symbol == "€"
        assert settings.log_level == "INFO"
        assert settings.future_date_tolerance_days == 366

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("FINANZ_CURRENCY_SYMBOL", "CHF")
        monkeypatch.setenv("FINANZ_LOG_LEVEL", "DEBUG")

        settings = Settings().app
        assert settings.currency_symbol == "CHF"
        assert settings.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            AppSettings(log_level="LOUD")


class TestSettingsAccess:
    """Tests for the cached accessor and startup check."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self):
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_validate_reports_bad_value(self, monkeypatch):
        monkeypatch.setenv("FINANZ_LOG_LEVEL", "LOUD")

        results = validate_all_settings()

        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
