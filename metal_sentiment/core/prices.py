"""Stock quotes and daily price history from Yahoo Finance (via yfinance).

Every fetch degrades to "no data" (``None`` / ``[]``) instead of raising, so
detail and correlation views can render without prices.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol

import pandas as pd
import yfinance as yf

if TYPE_CHECKING:
    from metal_sentiment.universe import TrackedInstrument

logger = logging.getLogger(__name__)


@dataclass
class StockQuote:
    """Latest quote for a stock."""

    symbol: str
    current_price: float
    previous_close: float
    change_percent: float
    day_high: float
    day_low: float
    volume: int
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "currentPrice": self.current_price,
            "previousClose": self.previous_close,
            "changePercent": self.change_percent,
            "dayHigh": self.day_high,
            "dayLow": self.day_low,
            "volume": self.volume,
            "timestamp": self.timestamp,
        }


@dataclass
class PriceBar:
    """One daily OHLCV bar with percent change vs. the prior close."""

    symbol: str
    date: str  # YYYY-MM-DD
    open: float
    high: float
    low: float
    close: float
    volume: int
    change_percent: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "symbol": self.symbol,
            "date": self.date,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
            "changePercent": self.change_percent,
        }


def percent_change(current: float, previous: float) -> float:
    """Percent change, 0 when the base is zero."""
    if not previous:
        return 0.0
    return (current - previous) / previous * 100


def select_history_period(days: int) -> str:
    """Coarsest yfinance period that covers ``days`` trading days."""
    if days <= 5:
        return "5d"
    if days <= 30:
        return "1mo"
    return "3mo"


def _num(value: Any) -> float:
    """NaN/None-safe float."""
    if value is None or pd.isna(value):
        return 0.0
    return float(value)


def build_price_bars(symbol: str, df: pd.DataFrame) -> list[PriceBar]:
    """Convert a yfinance history frame into PriceBars.

    Rows without a close are skipped. The base for the percent change is the
    previous row's close, or the row's own open when there is no previous
    close.
    """
    if df is None or df.empty:
        return []

    bars: list[PriceBar] = []
    prev_close: float | None = None

    for ts, row in df.iterrows():
        close = row.get("Close")
        if close is None or pd.isna(close):
            prev_close = None
            continue

        base = prev_close if prev_close is not None else _num(row.get("Open"))
        bars.append(
            PriceBar(
                symbol=symbol,
                date=pd.Timestamp(ts).strftime("%Y-%m-%d"),
                open=_num(row.get("Open")),
                high=_num(row.get("High")),
                low=_num(row.get("Low")),
                close=float(close),
                volume=int(_num(row.get("Volume"))),
                change_percent=percent_change(float(close), base),
            )
        )
        prev_close = float(close)

    return bars


def fetch_stock_quote(yahoo_symbol: str) -> StockQuote | None:
    """Fetch the latest quote for a Yahoo symbol (e.g. TATASTEEL.NS).

    Returns:
        StockQuote, or None if yfinance fails or returns no price
    """
    try:
        info = yf.Ticker(yahoo_symbol).fast_info
        current_price = _num(info["lastPrice"])
        previous_close = _num(info["previousClose"])
        quote = StockQuote(
            symbol=yahoo_symbol,
            current_price=current_price,
            previous_close=previous_close,
            change_percent=percent_change(current_price, previous_close),
            day_high=_num(info["dayHigh"]),
            day_low=_num(info["dayLow"]),
            volume=int(_num(info["lastVolume"])),
            timestamp=datetime.now(UTC).isoformat(),
        )
    except Exception as e:
        logger.error(f"Failed to fetch quote for {yahoo_symbol}: {e}")
        return None

    if not quote.current_price:
        logger.error(f"No quote data returned for {yahoo_symbol}")
        return None
    return quote


def fetch_historical_prices(yahoo_symbol: str, days: int = 30) -> list[PriceBar]:
    """Fetch daily bars covering ``days``, trimmed to exactly ``days``.

    Returns:
        PriceBars oldest first, or [] on any failure
    """
    if days <= 0:
        return []
    period = select_history_period(days)
    try:
        df = yf.Ticker(yahoo_symbol).history(period=period, interval="1d")
        bars = build_price_bars(yahoo_symbol, df)
    except Exception as e:
        logger.error(f"Failed to fetch historical prices for {yahoo_symbol}: {e}")
        return []

    if not bars:
        logger.warning(f"No historical data for {yahoo_symbol}")
    return bars[-days:]


class PriceFetcher(Protocol):
    """Protocol for market data lookups."""

    def fetch_quote(self, yahoo_symbol: str) -> StockQuote | None:
        """Latest quote, or None on failure."""
        ...

    def fetch_history(self, yahoo_symbol: str, days: int = 30) -> list[PriceBar]:
        """Last ``days`` daily bars, or [] on failure."""
        ...


class YFinancePriceFetcher:
    """Price fetcher backed by yfinance."""

    def fetch_quote(self, yahoo_symbol: str) -> StockQuote | None:
        return fetch_stock_quote(yahoo_symbol)

    def fetch_history(self, yahoo_symbol: str, days: int = 30) -> list[PriceBar]:
        return fetch_historical_prices(yahoo_symbol, days)


def fetch_all_stock_quotes(
    stocks: Iterable[TrackedInstrument],
    fetcher: PriceFetcher,
    delay: float = 0.2,
) -> dict[str, StockQuote]:
    """Fetch quotes for all stocks sequentially, skipping failures.

    Returns:
        Mapping of NSE symbol -> StockQuote (missing symbols had no quote)
    """
    stocks = list(stocks)
    quotes: dict[str, StockQuote] = {}
    logger.info(f"Fetching stock quotes for {len(stocks)} stocks...")

    for i, stock in enumerate(stocks):
        quote = fetcher.fetch_quote(stock.yahoo_symbol)
        if quote is not None:
            quotes[stock.symbol] = quote
            logger.info(f"Got quote for {stock.short_name}: {quote.current_price:.2f}")

        if delay and i < len(stocks) - 1:
            time.sleep(delay)

    return quotes
