"""Protocol definitions for dependency injection."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable

    from metal_sentiment.core.news.models import NewsItem
    from metal_sentiment.universe import TrackedInstrument


class NewsFetcher(Protocol):
    """Protocol for fetching news for tracked stocks."""

    def fetch_for_stock(self, stock: "TrackedInstrument") -> list["NewsItem"]:
        """Fetch deduplicated news for one stock, newest first."""
        ...

    def fetch_all(
        self, stocks: "Iterable[TrackedInstrument]"
    ) -> dict[str, list["NewsItem"]]:
        """Fetch news for every stock, keyed by symbol."""
        ...
