"""Response models for sentiment endpoints."""

from pydantic import Field

from metal_sentiment.routes.models import (
    CamelModel,
    SentimentDataPointResponse,
    SentimentResponse,
)

# ============================================================================
# Configuration constants
# ============================================================================

MAX_RECENT_NEWS = 15
DEFAULT_HISTORY_DAYS = 30


# ============================================================================
# Read models
# ============================================================================


class CachedNewsResponse(CamelModel):
    """A cached news item with its sentiment."""

    id: str
    title: str
    description: str = ""
    link: str
    pub_date: str
    source: str
    stock_symbol: str
    sentiment: SentimentResponse


class StockSentimentOverview(CamelModel):
    """One row of the sentiment overview."""

    symbol: str
    name: str
    sector: str
    sentiment: SentimentDataPointResponse | None
    last_updated: str


class StockSentimentDetail(CamelModel):
    """Current sentiment, history and recent news for one stock."""

    symbol: str
    current_sentiment: SentimentDataPointResponse | None
    history: list[SentimentDataPointResponse]
    recent_news: list[CachedNewsResponse]


class SentimentHistoryResponse(CamelModel):
    symbol: str
    history: list[SentimentDataPointResponse]


class StatusResponse(CamelModel):
    """Tracked/with-data counts and the last refresh's request usage."""

    stocks_tracked: int
    stocks_with_data: int
    last_updated: str
    api_requests_this_session: int


# ============================================================================
# Refresh models
# ============================================================================


class RefreshResponse(CamelModel):
    """Result of a refresh run."""

    success: bool
    message: str
    timestamp: str
    processed: list[str]
    dates_processed: int
    dates_skipped: int
    errors: list[str] | None = Field(
        None,
        description="Symbols that failed; omitted when every stock succeeded",
    )
    api_requests_used: int
