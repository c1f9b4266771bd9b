"""Tests for metal_sentiment.core.config module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from metal_sentiment.core.config import (
    DEFAULT_MAX_REQUESTS,
    RefreshSettings,
    get_app_env,
    get_cors_origins,
    get_data_dir,
    get_huggingface_api_key,
    get_max_requests_per_refresh,
    is_production,
    require_huggingface_api_key,
)
from metal_sentiment.domain.exceptions import ConfigurationError


class TestHuggingFaceApiKey:
    def test_missing_key_is_none(self) -> None:
        assert get_huggingface_api_key() is None

    def test_require_missing_key_raises(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            require_huggingface_api_key()
        assert exc_info.value.code == "CONFIGURATION_ERROR"
        assert exc_info.value.setting == "HUGGINGFACE_API_KEY"

    def test_require_returns_key(self) -> None:
        with patch.dict(os.environ, {"HUGGINGFACE_API_KEY": "hf_abc"}):
            assert require_huggingface_api_key() == "hf_abc"


class TestDataDir:
    def test_env_override(self, tmp_path) -> None:
        with patch.dict(os.environ, {"SENTIMENT_DATA_DIR": str(tmp_path)}):
            assert get_data_dir() == tmp_path

    def test_default(self) -> None:
        with patch.dict(os.environ, {"SENTIMENT_DATA_DIR": ""}):
            assert get_data_dir() == Path("data")


class TestMaxRequests:
    def test_default(self) -> None:
        assert get_max_requests_per_refresh() == DEFAULT_MAX_REQUESTS

    def test_override(self) -> None:
        with patch.dict(os.environ, {"SENTIMENT_MAX_REQUESTS": "25"}):
            assert get_max_requests_per_refresh() == 25

    def test_negative_is_clamped(self) -> None:
        with patch.dict(os.environ, {"SENTIMENT_MAX_REQUESTS": "-3"}):
            assert get_max_requests_per_refresh() == 0

    def test_invalid_raises(self) -> None:
        with patch.dict(os.environ, {"SENTIMENT_MAX_REQUESTS": "lots"}):
            with pytest.raises(ConfigurationError):
                get_max_requests_per_refresh()


class TestAppEnv:
    def test_default_is_development(self) -> None:
        assert get_app_env() == "development"
        assert not is_production()

    def test_production(self) -> None:
        with patch.dict(os.environ, {"APP_ENV": "Production"}):
            assert is_production()

    def test_environment_fallback(self) -> None:
        with patch.dict(os.environ, {"ENVIRONMENT": "staging"}):
            assert get_app_env() == "staging"


def test_refresh_settings_defaults() -> None:
    settings = RefreshSettings()
    assert settings.recent_days == 7
    assert settings.max_items_per_date == 5
    assert settings.max_scored_display_items == 15
    assert settings.max_cached_news == 20
    assert settings.max_loading_retries == 3


class TestCorsOrigins:
    def test_any_origin_outside_production(self) -> None:
        assert get_cors_origins() == ["*"]

    def test_production_uses_allow_list(self) -> None:
        with patch.dict(
            os.environ,
            {"APP_ENV": "production", "FRONTEND_URL": "https://metals.example.com"},
        ):
            assert get_cors_origins() == [
                "http://localhost:5173",
                "http://localhost:3000",
                "https://metals.example.com",
            ]
