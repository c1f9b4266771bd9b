"""Stock route handlers."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from metal_sentiment.core.correlation import correlate_sentiment_with_price
from metal_sentiment.core.prices import (
    PriceBar,
    PriceFetcher,
    StockQuote,
    fetch_all_stock_quotes,
)
from metal_sentiment.domain.exceptions import InstrumentNotFoundError
from metal_sentiment.routes.dependencies import get_json_store, get_price_fetcher
from metal_sentiment.routes.sentiment.helpers import to_data_points
from metal_sentiment.routes.stocks.models import (
    DEFAULT_CORRELATION_PERIOD,
    DETAIL_HISTORY_DAYS,
    CorrelationResponse,
    PriceBarResponse,
    QuoteResponse,
    StockDetailResponse,
    StockOverview,
    StockSymbolResponse,
)
from metal_sentiment.storage import JsonStore
from metal_sentiment.universe import METAL_STOCKS, TrackedInstrument, get_stock_by_symbol

logger = logging.getLogger(__name__)

router = APIRouter()

QUOTE_DELAY_SECONDS = 0.2


def get_quote_delay() -> float:
    """Seconds between quote requests when listing all stocks."""
    return QUOTE_DELAY_SECONDS


def _require_stock(symbol: str) -> TrackedInstrument:
    stock = get_stock_by_symbol(symbol)
    if stock is None:
        raise InstrumentNotFoundError(symbol)
    return stock


def _quote_response(quote: StockQuote | None) -> QuoteResponse | None:
    if quote is None:
        return None
    return QuoteResponse.model_validate(quote.to_dict())


def _bar_responses(bars: list[PriceBar]) -> list[PriceBarResponse]:
    return [PriceBarResponse.model_validate(bar.to_dict()) for bar in bars]


@router.get("", response_model=list[StockOverview])
def list_stocks(
    fetcher: Annotated[PriceFetcher, Depends(get_price_fetcher)],
    delay: Annotated[float, Depends(get_quote_delay)],
) -> list[StockOverview]:
    """Every tracked stock with its latest quote (null when unavailable)."""
    quotes = fetch_all_stock_quotes(METAL_STOCKS, fetcher, delay=delay)
    return [
        StockOverview(
            symbol=stock.symbol,
            name=stock.short_name,
            full_name=stock.name,
            sector=stock.sector,
            quote=_quote_response(quotes.get(stock.symbol)),
        )
        for stock in METAL_STOCKS
    ]


@router.get("/list/symbols", response_model=list[StockSymbolResponse])
def list_symbols() -> list[StockSymbolResponse]:
    """All tracked symbols."""
    return [
        StockSymbolResponse(symbol=s.symbol, name=s.short_name, sector=s.sector)
        for s in METAL_STOCKS
    ]


@router.get("/{symbol}", response_model=StockDetailResponse)
def get_stock(
    symbol: str,
    fetcher: Annotated[PriceFetcher, Depends(get_price_fetcher)],
    store: Annotated[JsonStore, Depends(get_json_store)],
) -> StockDetailResponse:
    """Stock details with latest quote and the last 30 daily bars.

    Raises:
        InstrumentNotFoundError: Symbol is not tracked (404)
    """
    stock = _require_stock(symbol)

    quote = fetcher.fetch_quote(stock.yahoo_symbol)
    bars = fetcher.fetch_history(stock.yahoo_symbol, DETAIL_HISTORY_DAYS)
    store.update_price_cache(
        stock.symbol,
        quote.to_dict() if quote is not None else None,
        [bar.to_dict() for bar in bars],
    )

    return StockDetailResponse(
        symbol=stock.symbol,
        name=stock.name,
        short_name=stock.short_name,
        sector=stock.sector,
        yahoo_symbol=stock.yahoo_symbol,
        quote=_quote_response(quote),
        price_history=_bar_responses(bars),
    )


@router.get("/{symbol}/correlation", response_model=CorrelationResponse)
def get_correlation(
    symbol: str,
    fetcher: Annotated[PriceFetcher, Depends(get_price_fetcher)],
    store: Annotated[JsonStore, Depends(get_json_store)],
    period: Annotated[int, Query(ge=1)] = DEFAULT_CORRELATION_PERIOD,
) -> CorrelationResponse:
    """Correlate daily sentiment with daily percent price change.

    Needs at least 5 sentiment entries, 5 price bars and 5 overlapping
    dates; otherwise ``correlation`` is null with an explanatory message.

    Raises:
        InstrumentNotFoundError: Symbol is not tracked (404)
    """
    stock = _require_stock(symbol)

    entry = store.load_sentiment_history()["stocks"].get(stock.symbol) or {}
    history = entry.get("history", [])
    bars = fetcher.fetch_history(stock.yahoo_symbol, period)

    result = correlate_sentiment_with_price(history, bars)
    if result.sufficient:
        logger.info(
            f"{stock.short_name} correlation over {result.data_points_used} days: "
            f"{result.correlation:.3f} ({result.correlation_strength})"
        )
        history = history[-period:]

    return CorrelationResponse(
        symbol=stock.symbol,
        period=f"{period}d",
        correlation=result.correlation,
        correlation_strength=result.correlation_strength,
        data_points_used=result.data_points_used,
        message=result.message,
        sentiment_data=to_data_points(history),
        price_data=_bar_responses(bars),
    )
