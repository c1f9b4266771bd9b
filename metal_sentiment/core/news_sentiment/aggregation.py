"""Sentiment aggregation logic."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from metal_sentiment.core.news_sentiment.models import (
    AggregateLabel,
    AggregateSentiment,
    SentimentDataPoint,
)

if TYPE_CHECKING:
    from metal_sentiment.core.finbert import AnalyzedNews
    from metal_sentiment.core.news.models import NewsItem
    from metal_sentiment.core.news_sentiment.protocols import SentimentScorer

BULLISH_THRESHOLD = 0.15
BEARISH_THRESHOLD = -0.15
TOP_HEADLINES = 3


def compute_sentiment_label(average_score: float) -> AggregateLabel:
    """Bucket an average score; exactly +/-0.15 is neutral."""
    if average_score > BULLISH_THRESHOLD:
        return "bullish"
    if average_score < BEARISH_THRESHOLD:
        return "bearish"
    return "neutral"


def calculate_aggregate_sentiment(analyzed: Sequence[AnalyzedNews]) -> AggregateSentiment:
    """Mean score, coarse label and per-label counts.

    Args:
        analyzed: Scored news items

    Returns:
        AggregateSentiment (all zeros and "neutral" for an empty input)
    """
    if not analyzed:
        return AggregateSentiment(
            average_score=0.0,
            sentiment_label="neutral",
            positive_count=0,
            negative_count=0,
            neutral_count=0,
            total_count=0,
        )

    average_score = sum(n.sentiment.score for n in analyzed) / len(analyzed)
    labels = [n.sentiment.label for n in analyzed]

    return AggregateSentiment(
        average_score=average_score,
        sentiment_label=compute_sentiment_label(average_score),
        positive_count=labels.count("positive"),
        negative_count=labels.count("negative"),
        neutral_count=labels.count("neutral"),
        total_count=len(analyzed),
    )


def top_headlines(
    analyzed: Iterable[AnalyzedNews],
    label: str,
    limit: int = TOP_HEADLINES,
) -> list[str]:
    """Titles with the given label, most confident first."""
    matching = [n for n in analyzed if n.sentiment.label == label]
    matching.sort(key=lambda n: n.sentiment.confidence, reverse=True)
    return [n.title for n in matching[:limit]]


def group_news_by_date(items: Iterable[NewsItem]) -> dict[str, list[NewsItem]]:
    """Partition news by UTC publish date, keeping input order per date."""
    grouped: dict[str, list[NewsItem]] = defaultdict(list)
    for item in items:
        grouped[item.date_key].append(item)
    return dict(grouped)


def build_data_point(
    symbol: str,
    date: str,
    analyzed: Sequence[AnalyzedNews],
) -> SentimentDataPoint:
    """Build the SentimentDataPoint for one (symbol, date)."""
    aggregate = calculate_aggregate_sentiment(analyzed)
    return SentimentDataPoint(
        date=date,
        stock_symbol=symbol,
        average_sentiment=aggregate.average_score,
        sentiment_label=aggregate.sentiment_label,
        news_count=aggregate.total_count,
        positive_count=aggregate.positive_count,
        negative_count=aggregate.negative_count,
        neutral_count=aggregate.neutral_count,
        top_positive_news=top_headlines(analyzed, "positive"),
        top_negative_news=top_headlines(analyzed, "negative"),
    )


def aggregate_date(
    symbol: str,
    date: str,
    items: Sequence[NewsItem],
    scorer: SentimentScorer,
    max_items: int = 5,
) -> SentimentDataPoint:
    """Score a date's news (first ``max_items`` only) and aggregate it."""
    analyzed = scorer.score_items(list(items[:max_items]))
    return build_data_point(symbol, date, analyzed)
