"""Data models for the news module."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class NewsItem:
    """A single news article for one tracked stock.

    Created by the fetcher and never mutated afterwards. ``id`` is derived
    from link + publish date, so the same article fetched twice gets the
    same id.
    """

    id: str
    title: str
    description: str
    link: str
    pub_date: datetime
    source: str
    stock_symbol: str

    @property
    def date_key(self) -> str:
        """UTC calendar date of publication (YYYY-MM-DD)."""
        return self.pub_date.astimezone(UTC).date().isoformat()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "pubDate": self.pub_date.isoformat(),
            "source": self.source,
            "stockSymbol": self.stock_symbol,
        }
