"""Response models for stock endpoints."""

from metal_sentiment.routes.models import CamelModel, SentimentDataPointResponse

# ============================================================================
# Configuration constants
# ============================================================================

DETAIL_HISTORY_DAYS = 30
DEFAULT_CORRELATION_PERIOD = 30


# ============================================================================
# Price models
# ============================================================================


class QuoteResponse(CamelModel):
    """Latest quote for a stock."""

    symbol: str
    current_price: float
    previous_close: float
    change_percent: float
    day_high: float
    day_low: float
    volume: int
    timestamp: str


class PriceBarResponse(CamelModel):
    """One daily bar."""

    symbol: str
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int
    change_percent: float


# ============================================================================
# Stock models
# ============================================================================


class StockOverview(CamelModel):
    symbol: str
    name: str
    full_name: str
    sector: str
    quote: QuoteResponse | None


class StockSymbolResponse(CamelModel):
    symbol: str
    name: str
    sector: str


class StockDetailResponse(CamelModel):
    """Stock details with quote and recent daily bars."""

    symbol: str
    name: str
    short_name: str
    sector: str
    yahoo_symbol: str
    quote: QuoteResponse | None
    price_history: list[PriceBarResponse]


class CorrelationResponse(CamelModel):
    """Sentiment vs. daily price change correlation.

    ``correlation`` is null and ``message`` explains why when there is not
    enough overlapping data.
    """

    symbol: str
    period: str
    correlation: float | None
    correlation_strength: str | None = None
    data_points_used: int = 0
    message: str | None = None
    sentiment_data: list[SentimentDataPointResponse]
    price_data: list[PriceBarResponse]
