"""Dependency injection for sentiment endpoints."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from metal_sentiment.core.config import (
    RefreshSettings,
    get_max_requests_per_refresh,
    require_huggingface_api_key,
)
from metal_sentiment.core.finbert import HuggingFaceFinBERTScorer, RequestQuota
from metal_sentiment.core.news import GoogleNewsFetcher, NewsFetcher
from metal_sentiment.core.news_sentiment import SentimentScorer


@dataclass
class RefreshSession:
    """What the most recent refresh reported, for the status endpoint."""

    api_requests_used: int = 0
    last_refresh: str | None = None

    def record(self, api_requests_used: int, timestamp: str) -> None:
        self.api_requests_used = api_requests_used
        self.last_refresh = timestamp


@lru_cache(maxsize=1)
def get_refresh_session() -> RefreshSession:
    """Get the process-wide refresh session."""
    return RefreshSession()


def get_refresh_settings() -> RefreshSettings:
    """Get the refresh pacing and sizing."""
    return RefreshSettings()


def get_news_fetcher(
    settings: Annotated[RefreshSettings, Depends(get_refresh_settings)],
) -> NewsFetcher:
    """Get the news fetcher implementation."""
    return GoogleNewsFetcher(
        term_delay=settings.term_delay,
        stock_delay=settings.stock_delay,
    )


def get_huggingface_api_key() -> str:
    """Get the HuggingFace API key (ConfigurationError when unset)."""
    return require_huggingface_api_key()


def get_request_quota() -> RequestQuota:
    """Get a fresh request quota for one refresh."""
    return RequestQuota(limit=get_max_requests_per_refresh())


def get_sentiment_scorer(
    api_key: Annotated[str, Depends(get_huggingface_api_key)],
    quota: Annotated[RequestQuota, Depends(get_request_quota)],
    settings: Annotated[RefreshSettings, Depends(get_refresh_settings)],
) -> SentimentScorer:
    """Get the sentiment scorer with injected dependencies."""
    return HuggingFaceFinBERTScorer(
        api_key=api_key,
        quota=quota,
        item_delay=settings.item_delay,
        loading_wait=settings.loading_wait,
        max_loading_retries=settings.max_loading_retries,
    )
