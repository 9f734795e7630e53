"""Unit tests for settings loading and logging setup."""

import logging
from unittest.mock import patch

from model_serializer.config import ENV_VARS, Settings, configure_logging, load_settings


class TestLoadSettings:
    """Tests for settings loading from environment."""

    def test_load_settings_from_env(self, mock_env_vars):
        """Settings fields should be populated from env vars."""
        settings = load_settings()
        assert settings.tag == "api"
        assert settings.log_level == "DEBUG"

    def test_load_settings_defaults(self, clean_env):
        """Default values should be applied when nothing is set."""
        settings = load_settings()
        assert settings.tag == "json"
        assert settings.log_level == "WARNING"

    def test_empty_tag_falls_back_to_default(self, clean_env, monkeypatch):
        monkeypatch.setenv("MODEL_SERIALIZER_TAG", "")
        assert load_settings().tag == "json"

    def test_documented_env_vars(self):
        assert set(ENV_VARS) == {"MODEL_SERIALIZER_TAG", "MODEL_SERIALIZER_LOG_LEVEL"}


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_uses_configured_level(self):
        with patch("model_serializer.config.logging.basicConfig") as basic:
            configure_logging(Settings(log_level="DEBUG"))
        assert basic.call_args.kwargs["level"] == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self):
        with patch("model_serializer.config.logging.basicConfig") as basic:
            configure_logging(Settings(log_level="CHATTY"))
        assert basic.call_args.kwargs["level"] == logging.WARNING

    def test_loads_settings_when_none_given(self, mock_env_vars):
        with patch("model_serializer.config.logging.basicConfig") as basic:
            configure_logging()
        assert basic.call_args.kwargs["level"] == logging.DEBUG
