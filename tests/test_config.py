"""
Tests for loading settings from the environment.
"""

import pytest
from pydantic import ValidationError

from innervoice.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.api_key == ""
        assert not settings.has_credentials
        assert settings.base_url == "https://openrouter.ai/api/v1"
        assert settings.quote_model == "anthropic/claude-3-haiku:beta"
        assert settings.letter_model == "anthropic/claude-3-haiku:beta"
        assert settings.app_url == "http://localhost:3000"
        assert settings.max_retries == 3
        assert settings.retry_base_delay == 1.0

    def test_reads_provider_and_service_variables(self, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
        monkeypatch.setenv("OPENROUTER_BASE_URL", "https://proxy.test/v1/")
        monkeypatch.setenv("OPENROUTER_MODEL_QUOTE", "quote-model")
        monkeypatch.setenv("OPENROUTER_MODEL_LETTER", "letter-model")
        monkeypatch.setenv("APP_URL", "https://innervoice.test")
        monkeypatch.setenv("INNERVOICE_MAX_RETRIES", "5")
        monkeypatch.setenv("INNERVOICE_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.has_credentials
        assert settings.api_key == "sk-test"
        assert settings.base_url == "https://proxy.test/v1"
        assert settings.quote_model == "quote-model"
        assert settings.letter_model == "letter-model"
        assert settings.app_url == "https://innervoice.test"
        assert settings.max_retries == 5
        assert settings.log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_settings_are_read_only(self):
        settings = Settings(_env_file=None, api_key="sk-test")
        with pytest.raises(ValidationError):
            settings.api_key = "other"
