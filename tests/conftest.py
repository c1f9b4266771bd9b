"""Pytest configuration and fixtures for all tests.

This module ensures tests run in isolation from production environment variables.
"""

import os

import pytest

from metal_sentiment.routes.sentiment.dependencies import get_refresh_session

# Environment variables that should not affect tests
SERVICE_ENV_VARS = [
    "HUGGINGFACE_API_KEY",
    "SENTIMENT_DATA_DIR",
    "SENTIMENT_MAX_REQUESTS",
    "APP_ENV",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "FRONTEND_URL",
]


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear service env vars before each test to prevent external API calls.

    This fixture runs automatically for every test (autouse=True).
    It saves original values, clears them for the test, then restores after.
    """
    original_values = {}
    for var in SERVICE_ENV_VARS:
        if var in os.environ:
            original_values[var] = os.environ.pop(var)

    yield

    for var in SERVICE_ENV_VARS:
        os.environ.pop(var, None)
    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture(autouse=True)
def isolate_data_dir(tmp_path, monkeypatch):
    """Route JSON documents to a temp directory so tests never touch ./data."""
    monkeypatch.setenv("SENTIMENT_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture(autouse=True)
def reset_refresh_session():
    """Start every test with a fresh refresh session."""
    get_refresh_session.cache_clear()
    yield
    get_refresh_session.cache_clear()
