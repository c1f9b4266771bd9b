"""Sentiment route handlers."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from metal_sentiment.core.config import RefreshSettings
from metal_sentiment.core.news import NewsFetcher
from metal_sentiment.core.news_sentiment import SentimentScorer, run_refresh
from metal_sentiment.routes.dependencies import get_json_store
from metal_sentiment.routes.sentiment.dependencies import (
    RefreshSession,
    get_news_fetcher,
    get_refresh_session,
    get_refresh_settings,
    get_sentiment_scorer,
)
from metal_sentiment.routes.sentiment.helpers import (
    summary_to_response,
    to_cached_news,
    to_data_point,
    to_data_points,
)
from metal_sentiment.routes.sentiment.models import (
    DEFAULT_HISTORY_DAYS,
    MAX_RECENT_NEWS,
    RefreshResponse,
    SentimentHistoryResponse,
    StatusResponse,
    StockSentimentDetail,
    StockSentimentOverview,
)
from metal_sentiment.storage import JsonStore
from metal_sentiment.universe import METAL_STOCKS

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Overview and status
# ============================================================================


@router.get("", response_model=list[StockSentimentOverview])
def get_sentiment_overview(
    store: Annotated[JsonStore, Depends(get_json_store)],
) -> list[StockSentimentOverview]:
    """Current sentiment for every tracked stock (null when never refreshed)."""
    history = store.load_sentiment_history()
    return [
        StockSentimentOverview(
            symbol=stock.symbol,
            name=stock.short_name,
            sector=stock.sector,
            sentiment=to_data_point(
                (history["stocks"].get(stock.symbol) or {}).get("currentSentiment")
            ),
            last_updated=history["lastUpdated"],
        )
        for stock in METAL_STOCKS
    ]


@router.get("/status/info", response_model=StatusResponse)
def get_status(
    store: Annotated[JsonStore, Depends(get_json_store)],
    session: Annotated[RefreshSession, Depends(get_refresh_session)],
) -> StatusResponse:
    """Refresh status and model request usage of the last refresh."""
    history = store.load_sentiment_history()
    return StatusResponse(
        stocks_tracked=len(METAL_STOCKS),
        stocks_with_data=len(history["stocks"]),
        last_updated=history["lastUpdated"],
        api_requests_this_session=session.api_requests_used,
    )


# ============================================================================
# Refresh
# ============================================================================


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    response_model_exclude_none=True,
)
def refresh_sentiment(
    fetcher: Annotated[NewsFetcher, Depends(get_news_fetcher)],
    scorer: Annotated[SentimentScorer, Depends(get_sentiment_scorer)],
    store: Annotated[JsonStore, Depends(get_json_store)],
    settings: Annotated[RefreshSettings, Depends(get_refresh_settings)],
    session: Annotated[RefreshSession, Depends(get_refresh_session)],
) -> RefreshResponse:
    """Fetch news, score it with FinBERT and update sentiment history.

    This endpoint:
    1. Fetches Google News RSS results for every tracked stock
    2. Groups the last 7 days of news by publish date
    3. Aggregates sentiment for each date not yet in history (today always)
    4. Replaces each stock's cached news with freshly scored items

    Runs synchronously; a full backfill can take several minutes.
    """
    summary = run_refresh(
        stocks=METAL_STOCKS,
        fetcher=fetcher,
        scorer=scorer,
        store=store,
        settings=settings,
    )
    session.record(summary.api_requests_used, summary.timestamp)
    return summary_to_response(summary)


# ============================================================================
# Per-stock endpoints
# ============================================================================


@router.get("/{symbol}", response_model=StockSentimentDetail)
def get_stock_sentiment(
    symbol: str,
    store: Annotated[JsonStore, Depends(get_json_store)],
) -> StockSentimentDetail:
    """Current sentiment, history and recent news for one stock.

    Symbols without data (including unknown ones) return an empty detail.
    """
    symbol = symbol.upper()
    entry = store.load_sentiment_history()["stocks"].get(symbol)
    if not entry:
        return StockSentimentDetail(
            symbol=symbol,
            current_sentiment=None,
            history=[],
            recent_news=[],
        )

    return StockSentimentDetail(
        symbol=symbol,
        current_sentiment=to_data_point(entry.get("currentSentiment")),
        history=to_data_points(entry.get("history", [])),
        recent_news=to_cached_news(store.get_cached_news(symbol)[:MAX_RECENT_NEWS]),
    )


@router.get("/{symbol}/history", response_model=SentimentHistoryResponse)
def get_stock_sentiment_history(
    symbol: str,
    store: Annotated[JsonStore, Depends(get_json_store)],
    days: Annotated[int, Query(ge=1)] = DEFAULT_HISTORY_DAYS,
) -> SentimentHistoryResponse:
    """The trailing ``days`` history entries for one stock."""
    symbol = symbol.upper()
    entry = store.load_sentiment_history()["stocks"].get(symbol) or {}
    history = entry.get("history", [])
    return SentimentHistoryResponse(
        symbol=symbol,
        history=to_data_points(history[-days:]),
    )
