"""Data models for news sentiment aggregation."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal

AggregateLabel = Literal["bullish", "bearish", "neutral"]


@dataclass
class SentimentDataPoint:
    """Aggregated sentiment for one stock on one calendar date.

    At most one data point exists per (symbol, date) in history.
    """

    date: str  # YYYY-MM-DD (UTC)
    stock_symbol: str
    average_sentiment: float
    sentiment_label: AggregateLabel
    news_count: int
    positive_count: int
    negative_count: int
    neutral_count: int
    top_positive_news: list[str] = field(default_factory=list)
    top_negative_news: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "date": self.date,
            "stockSymbol": self.stock_symbol,
            "averageSentiment": self.average_sentiment,
            "sentimentLabel": self.sentiment_label,
            "newsCount": self.news_count,
            "positiveCount": self.positive_count,
            "negativeCount": self.negative_count,
            "neutralCount": self.neutral_count,
            "topPositiveNews": list(self.top_positive_news),
            "topNegativeNews": list(self.top_negative_news),
        }


@dataclass
class AggregateSentiment:
    """Summary statistics over a set of analyzed news items."""

    average_score: float
    sentiment_label: AggregateLabel
    positive_count: int
    negative_count: int
    neutral_count: int
    total_count: int


@dataclass
class RefreshSummary:
    """Outcome of a refresh run."""

    processed: list[str] = field(default_factory=list)
    dates_processed: int = 0
    dates_skipped: int = 0
    errors: list[str] = field(default_factory=list)
    api_requests_used: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "processed": self.processed,
            "datesProcessed": self.dates_processed,
            "datesSkipped": self.dates_skipped,
            "errors": self.errors,
            "apiRequestsUsed": self.api_requests_used,
            "timestamp": self.timestamp,
        }
