"""Shared pytest fixtures for managing env vars."""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Clear all MODEL_SERIALIZER_* env vars and prevent .env reload."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("MODEL_SERIALIZER_"):
            monkeypatch.delenv(key, raising=False)

    # Prevent load_dotenv() from re-reading .env file during tests
    monkeypatch.setattr("model_serializer.config.load_dotenv", lambda *a, **kw: None)


@pytest.fixture
def mock_env_vars(clean_env, monkeypatch):
    """Set every supported env var to a test value."""
    monkeypatch.setenv("MODEL_SERIALIZER_TAG", "api")
    monkeypatch.setenv("MODEL_SERIALIZER_LOG_LEVEL", "debug")
