"""Sentiment endpoints.

- Overview, per-stock detail and history read from the JSON documents
- Refresh runs the news -> FinBERT -> history pipeline
"""

from metal_sentiment.routes.sentiment.endpoints import router

# Re-export dependencies for testing
from metal_sentiment.routes.sentiment.dependencies import (
    RefreshSession,
    get_huggingface_api_key,
    get_news_fetcher,
    get_refresh_session,
    get_refresh_settings,
    get_request_quota,
    get_sentiment_scorer,
)

__all__ = [
    "router",
    # Dependencies
    "RefreshSession",
    "get_huggingface_api_key",
    "get_news_fetcher",
    "get_refresh_session",
    "get_refresh_settings",
    "get_request_quota",
    "get_sentiment_scorer",
]
