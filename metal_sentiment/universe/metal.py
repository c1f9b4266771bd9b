"""Nifty Metal universe.

Seven large-cap Indian metal and mining stocks. The list is static and
defined at import time; search terms drive the Google News queries.
"""

from dataclasses import dataclass
from typing import Literal

Sector = Literal["steel", "aluminum", "mining", "coal"]


@dataclass(frozen=True)
class TrackedInstrument:
    """A stock tracked by the sentiment pipeline."""

    symbol: str  # NSE symbol
    name: str
    short_name: str
    yahoo_symbol: str  # NSE suffix for Yahoo Finance
    search_terms: tuple[str, ...]
    sector: Sector

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "shortName": self.short_name,
            "yahooSymbol": self.yahoo_symbol,
            "searchTerms": list(self.search_terms),
            "sector": self.sector,
        }


METAL_STOCKS: tuple[TrackedInstrument, ...] = (
    TrackedInstrument(
        symbol="TATASTEEL",
        name="Tata Steel Limited",
        short_name="Tata Steel",
        yahoo_symbol="TATASTEEL.NS",
        search_terms=("Tata Steel", "TATASTEEL", "Tata Steel India"),
        sector="steel",
    ),
    TrackedInstrument(
        symbol="JSWSTEEL",
        name="JSW Steel Limited",
        short_name="JSW Steel",
        yahoo_symbol="JSWSTEEL.NS",
        search_terms=("JSW Steel", "JSWSTEEL", "JSW Steel India"),
        sector="steel",
    ),
    TrackedInstrument(
        symbol="HINDALCO",
        name="Hindalco Industries Limited",
        short_name="Hindalco",
        yahoo_symbol="HINDALCO.NS",
        search_terms=("Hindalco", "Hindalco Industries", "Novelis"),
        sector="aluminum",
    ),
    TrackedInstrument(
        symbol="VEDL",
        name="Vedanta Limited",
        short_name="Vedanta",
        yahoo_symbol="VEDL.NS",
        search_terms=("Vedanta Limited", "VEDL", "Vedanta India metals"),
        sector="mining",
    ),
    TrackedInstrument(
        symbol="SAIL",
        name="Steel Authority of India Limited",
        short_name="SAIL",
        yahoo_symbol="SAIL.NS",
        search_terms=("SAIL", "Steel Authority of India", "SAIL India steel"),
        sector="steel",
    ),
    TrackedInstrument(
        symbol="NMDC",
        name="NMDC Limited",
        short_name="NMDC",
        yahoo_symbol="NMDC.NS",
        search_terms=("NMDC", "NMDC Limited", "NMDC India iron ore"),
        sector="mining",
    ),
    TrackedInstrument(
        symbol="COALINDIA",
        name="Coal India Limited",
        short_name="Coal India",
        yahoo_symbol="COALINDIA.NS",
        search_terms=("Coal India", "COALINDIA", "Coal India Limited"),
        sector="coal",
    ),
)


def get_stock_by_symbol(symbol: str) -> TrackedInstrument | None:
    """Look up a tracked stock by its NSE symbol (case-insensitive)."""
    wanted = symbol.upper()
    return next((s for s in METAL_STOCKS if s.symbol == wanted), None)


def get_all_symbols() -> list[str]:
    """Return all tracked NSE symbols in registry order."""
    return [stock.symbol for stock in METAL_STOCKS]
