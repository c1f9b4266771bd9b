"""Helper functions for sentiment endpoints."""

from typing import Any

from metal_sentiment.core.news_sentiment import RefreshSummary
from metal_sentiment.routes.models import SentimentDataPointResponse
from metal_sentiment.routes.sentiment.models import (
    CachedNewsResponse,
    RefreshResponse,
)


def to_data_points(history: list[dict[str, Any]]) -> list[SentimentDataPointResponse]:
    """Convert stored history entries to response models."""
    return [SentimentDataPointResponse.model_validate(h) for h in history]


def to_data_point(point: dict[str, Any] | None) -> SentimentDataPointResponse | None:
    if not point:
        return None
    return SentimentDataPointResponse.model_validate(point)


def to_cached_news(news: list[dict[str, Any]]) -> list[CachedNewsResponse]:
    """Convert cached news dicts to response models."""
    return [CachedNewsResponse.model_validate(n) for n in news]


def summary_to_response(summary: RefreshSummary) -> RefreshResponse:
    """Convert internal RefreshSummary to API response format."""
    return RefreshResponse(
        success=True,
        message="Sentiment data refreshed with historical backfill",
        timestamp=summary.timestamp,
        processed=summary.processed,
        dates_processed=summary.dates_processed,
        dates_skipped=summary.dates_skipped,
        errors=summary.errors or None,
        api_requests_used=summary.api_requests_used,
    )
