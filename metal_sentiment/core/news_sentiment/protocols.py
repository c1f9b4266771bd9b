"""Protocol definitions for dependency injection."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from metal_sentiment.core.finbert import AnalyzedNews
    from metal_sentiment.core.news.models import NewsItem


class SentimentScorer(Protocol):
    """Protocol for scoring news sentiment."""

    @property
    def request_count(self) -> int:
        """Model requests made so far in this refresh."""
        ...

    def score_items(self, items: Sequence["NewsItem"]) -> list["AnalyzedNews"]:
        """Score news items, one result per item in order."""
        ...
