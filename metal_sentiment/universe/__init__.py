"""Tracked instrument universe."""

from metal_sentiment.universe.metal import (
    METAL_STOCKS,
    TrackedInstrument,
    get_all_symbols,
    get_stock_by_symbol,
)

__all__ = [
    "METAL_STOCKS",
    "TrackedInstrument",
    "get_all_symbols",
    "get_stock_by_symbol",
]
