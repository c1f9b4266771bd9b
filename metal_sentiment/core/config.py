"""Configuration for the sentiment service.

Settings come from environment variables (optionally loaded from a ``.env``
file at app start). Each variable has a getter so tests can patch the
environment instead of module globals.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from metal_sentiment.domain.exceptions import ConfigurationError

# Environment variable names
ENV_HUGGINGFACE_API_KEY = "HUGGINGFACE_API_KEY"
ENV_DATA_DIR = "SENTIMENT_DATA_DIR"
ENV_MAX_REQUESTS = "SENTIMENT_MAX_REQUESTS"
ENV_APP_ENV = "APP_ENV"
ENV_ENVIRONMENT = "ENVIRONMENT"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_FRONTEND_URL = "FRONTEND_URL"

# Defaults
DEFAULT_DATA_DIR = "data"
DEFAULT_MAX_REQUESTS = 500  # enough to backfill a week for all seven stocks
DEFAULT_APP_ENV = "development"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Browser origins allowed in production (any origin is allowed otherwise)
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://localhost:3000")


def get_huggingface_api_key() -> str | None:
    """Get the HuggingFace inference API key from environment."""
    return os.environ.get(ENV_HUGGINGFACE_API_KEY) or None


def require_huggingface_api_key() -> str:
    """Get the HuggingFace API key or raise ConfigurationError.

    Only the refresh operation needs the key; read endpoints work without it.
    """
    key = get_huggingface_api_key()
    if not key:
        raise ConfigurationError(
            "HuggingFace API key not configured. "
            f"Please set {ENV_HUGGINGFACE_API_KEY} environment variable",
            setting=ENV_HUGGINGFACE_API_KEY,
        )
    return key


def get_data_dir() -> Path:
    """Directory holding the JSON documents (default: ./data)."""
    return Path(os.environ.get(ENV_DATA_DIR, "") or DEFAULT_DATA_DIR)


def get_max_requests_per_refresh() -> int:
    """Sentiment model request quota for a single refresh."""
    raw = os.environ.get(ENV_MAX_REQUESTS, "")
    if not raw:
        return DEFAULT_MAX_REQUESTS
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{ENV_MAX_REQUESTS} must be an integer, got {raw!r}",
            setting=ENV_MAX_REQUESTS,
        ) from e
    return max(0, value)


def get_app_env() -> str:
    """Deployment environment name (development, production, ...)."""
    return (
        os.environ.get(ENV_APP_ENV, "")
        or os.environ.get(ENV_ENVIRONMENT, "")
        or DEFAULT_APP_ENV
    )


def is_production() -> bool:
    """Whether internal error detail should be hidden from API callers."""
    return get_app_env().lower() == "production"


def get_cors_origins() -> list[str]:
    """Allowed CORS origins: everything outside production."""
    if not is_production():
        return ["*"]
    origins = list(DEFAULT_CORS_ORIGINS)
    frontend_url = os.environ.get(ENV_FRONTEND_URL, "")
    if frontend_url:
        origins.append(frontend_url)
    return origins


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the service."""
    level_name = (level or os.environ.get(ENV_LOG_LEVEL, "") or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


@dataclass
class RefreshSettings:
    """Pacing and sizing of the refresh pipeline.

    Attributes:
        recent_days: Only news published in the last N days is processed
        max_items_per_date: News items scored per calendar date
        max_scored_display_items: News items scored for the news cache
        max_cached_news: News items stored per symbol in the news cache
        term_delay: Seconds between feed queries for one stock
        stock_delay: Seconds between stocks
        item_delay: Seconds between sentiment model requests
        loading_wait: Seconds to wait when the model is warming up
        max_loading_retries: Warm-up retries before degrading to neutral
    """

    recent_days: int = 7
    max_items_per_date: int = 5
    max_scored_display_items: int = 15
    max_cached_news: int = 20
    term_delay: float = 0.3
    stock_delay: float = 0.5
    item_delay: float = 1.0
    loading_wait: float = 20.0
    max_loading_retries: int = 3
