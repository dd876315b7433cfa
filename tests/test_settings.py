"""Tests for environment-driven settings."""

import logging

import pytest

from src.flight_search.config import (
    AMADEUS_PRODUCTION_URL,
    AMADEUS_TEST_URL,
    DEFAULT_CORS_ORIGINS,
    Settings,
)

ENV_VARS = (
    "AMADEUS_CLIENT_ID",
    "AMADEUS_CLIENT_SECRET",
    "AMADEUS_ENV",
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "SITE_URL",
    "REQUEST_TIMEOUT_SECONDS",
    "AUTOCOMPLETE_DEBOUNCE_MS",
    "AMADEUS_MAX_OFFERS",
    "CORS_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Empty environment and an empty .env file."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    dotenv = tmp_path / ".env"
    dotenv.write_text("")
    return dotenv


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_defaults_warn_about_missing_credentials(self, clean_env, caplog):
        with caplog.at_level(logging.WARNING):
            settings = Settings.from_env(str(clean_env))

        assert settings.amadeus_base_url == AMADEUS_TEST_URL
        assert settings.autocomplete_debounce_ms == 150
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS
        assert not settings.has_amadeus_credentials
        assert "AMADEUS_CLIENT_ID" in caplog.text
        assert "OPENROUTER_API_KEY" in caplog.text

    def test_reads_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("AMADEUS_CLIENT_ID", " id ")
        monkeypatch.setenv("AMADEUS_CLIENT_SECRET", "secret")
        monkeypatch.setenv("AMADEUS_ENV", "Production")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "7.5")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

        settings = Settings.from_env(str(clean_env))

        assert settings.amadeus_client_id == "id"
        assert settings.has_amadeus_credentials
        assert settings.amadeus_base_url == AMADEUS_PRODUCTION_URL
        assert settings.request_timeout_seconds == 7.5
        assert settings.cors_origins == ("https://a.example", "https://b.example")

    def test_dotenv_file_is_loaded(self, clean_env, monkeypatch):
        clean_env.write_text("OPENROUTER_API_KEY=from-file\nAUTOCOMPLETE_DEBOUNCE_MS=300\n")

        settings = Settings.from_env(str(clean_env))

        assert settings.openrouter_api_key == "from-file"
        assert settings.autocomplete_debounce_ms == 300

    def test_settings_are_frozen(self):
        with pytest.raises(AttributeError):
            Settings().amadeus_env = "production"
