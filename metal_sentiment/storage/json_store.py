"""Flat-file JSON persistence.

Three independent documents live in the data directory:

- sentiment-history.json: per symbol, current data point + rolling history
- news-cache.json: per symbol, the latest scored news (replaced each refresh)
- stock-prices.json: per symbol, latest quote + recent daily bars

Every document has the shape ``{"lastUpdated": iso, "stocks": {...}}``.
A missing or unreadable file loads as an empty document. Saves overwrite the
whole file; there is no locking, so only one refresh may write at a time.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from metal_sentiment.core.news_sentiment.models import SentimentDataPoint
from metal_sentiment.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

SENTIMENT_HISTORY_FILE = "sentiment-history.json"
NEWS_CACHE_FILE = "news-cache.json"
STOCK_PRICES_FILE = "stock-prices.json"

HISTORY_LIMIT = 30


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def empty_document() -> dict[str, Any]:
    """A fresh, well-formed document with no stocks."""
    return {"lastUpdated": _now_iso(), "stocks": {}}


def merge_data_point(
    entry: dict[str, Any] | None,
    data_point: SentimentDataPoint,
    limit: int = HISTORY_LIMIT,
) -> dict[str, Any]:
    """Merge a data point into a symbol's history entry.

    Replaces ``currentSentiment``; replaces the same-date history entry in
    place or adds a new one; keeps history in date order and trims it to the
    most recent ``limit`` entries.

    Args:
        entry: Existing ``{"currentSentiment", "history"}`` entry, or None
        data_point: New data point
        limit: Maximum history length

    Returns:
        The updated entry (a new dict when ``entry`` is None)
    """
    point = data_point.to_dict()
    if entry is None:
        entry = {"currentSentiment": point, "history": []}

    entry["currentSentiment"] = point
    history: list[dict[str, Any]] = list(entry.get("history", []))

    for i, existing in enumerate(history):
        if existing.get("date") == data_point.date:
            history[i] = point
            break
    else:
        history.append(point)

    history.sort(key=lambda h: h["date"])
    entry["history"] = history[-limit:]
    return entry


class JsonStore:
    """Load and save the three JSON documents under ``base_path``."""

    def __init__(self, base_path: Path, history_limit: int = HISTORY_LIMIT):
        """Initialize the store.

        Args:
            base_path: Data directory (created on first save)
            history_limit: Data points kept per symbol
        """
        self.base_path = Path(base_path)
        self.history_limit = history_limit

    def path_for(self, filename: str) -> Path:
        return self.base_path / filename

    # ------------------------------------------------------------------
    # Generic document IO
    # ------------------------------------------------------------------

    def _load(self, filename: str) -> dict[str, Any]:
        path = self.path_for(filename)
        if not path.exists():
            return empty_document()
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            logger.warning(f"Document corrupt/unreadable, treating as empty: {path}")
            return empty_document()

        if not isinstance(data, dict) or not isinstance(data.get("stocks"), dict):
            logger.warning(f"Document has unexpected shape, treating as empty: {path}")
            return empty_document()
        data.setdefault("lastUpdated", _now_iso())
        return data

    def _save(self, filename: str, document: dict[str, Any]) -> None:
        path = self.path_for(filename)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(document, indent=2, default=str))
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}", path=str(path)) from e

    # ------------------------------------------------------------------
    # Sentiment history
    # ------------------------------------------------------------------

    def load_sentiment_history(self) -> dict[str, Any]:
        return self._load(SENTIMENT_HISTORY_FILE)

    def save_sentiment_history(self, document: dict[str, Any]) -> None:
        self._save(SENTIMENT_HISTORY_FILE, document)

    def append_sentiment_data_point(
        self, symbol: str, data_point: SentimentDataPoint
    ) -> dict[str, Any]:
        """Add or replace a symbol's data point for its date and save.

        Returns:
            The symbol's updated history entry
        """
        history = self.load_sentiment_history()
        stocks = history["stocks"]
        stocks[symbol] = merge_data_point(
            stocks.get(symbol), data_point, limit=self.history_limit
        )
        history["lastUpdated"] = _now_iso()
        self.save_sentiment_history(history)
        return stocks[symbol]

    # ------------------------------------------------------------------
    # News cache
    # ------------------------------------------------------------------

    def load_news_cache(self) -> dict[str, Any]:
        return self._load(NEWS_CACHE_FILE)

    def save_news_cache(self, document: dict[str, Any]) -> None:
        self._save(NEWS_CACHE_FILE, document)

    @staticmethod
    def set_cached_news(
        document: dict[str, Any], symbol: str, news: list[dict[str, Any]]
    ) -> None:
        """Replace (not merge) a symbol's cached news in a loaded document."""
        document["stocks"][symbol] = {"news": news}

    def update_news_cache(self, symbol: str, news: list[dict[str, Any]]) -> None:
        """Replace a symbol's cached news and save."""
        document = self.load_news_cache()
        self.set_cached_news(document, symbol, news)
        document["lastUpdated"] = _now_iso()
        self.save_news_cache(document)

    def get_cached_news(self, symbol: str) -> list[dict[str, Any]]:
        """Cached news for a symbol, newest first ([] when absent)."""
        entry = self.load_news_cache()["stocks"].get(symbol) or {}
        return list(entry.get("news") or [])

    # ------------------------------------------------------------------
    # Price cache
    # ------------------------------------------------------------------

    def load_stock_prices(self) -> dict[str, Any]:
        return self._load(STOCK_PRICES_FILE)

    def save_stock_prices(self, document: dict[str, Any]) -> None:
        self._save(STOCK_PRICES_FILE, document)

    def update_price_cache(
        self,
        symbol: str,
        quote: dict[str, Any] | None,
        history: list[dict[str, Any]],
    ) -> None:
        """Store the latest quote and bars for a symbol and save.

        A missing quote or empty history keeps whatever was cached before.
        """
        document = self.load_stock_prices()
        entry = document["stocks"].setdefault(symbol, {"currentQuote": None, "history": []})
        if quote is not None:
            entry["currentQuote"] = quote
        if history:
            entry["history"] = history
        document["lastUpdated"] = _now_iso()
        self.save_stock_prices(document)
