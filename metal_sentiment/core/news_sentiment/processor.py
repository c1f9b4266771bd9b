"""Refresh pipeline: fetch news, score it, update persisted history."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

from metal_sentiment.core.finbert import AnalyzedNews, SentimentResult
from metal_sentiment.core.news.fetcher import filter_recent_news
from metal_sentiment.core.news_sentiment.aggregation import (
    aggregate_date,
    group_news_by_date,
)
from metal_sentiment.core.news_sentiment.models import RefreshSummary

if TYPE_CHECKING:
    from metal_sentiment.core.config import RefreshSettings
    from metal_sentiment.core.news.models import NewsItem
    from metal_sentiment.core.news.protocols import NewsFetcher
    from metal_sentiment.core.news_sentiment.protocols import SentimentScorer
    from metal_sentiment.storage import JsonStore
    from metal_sentiment.universe import TrackedInstrument

logger = logging.getLogger(__name__)


def enrich_news_with_sentiment(
    news: Sequence[NewsItem],
    analyzed: Sequence[AnalyzedNews],
) -> list[dict[str, Any]]:
    """Attach sentiment to news dicts by position; unscored items are neutral."""
    enriched = []
    for i, item in enumerate(news):
        sentiment = analyzed[i].sentiment if i < len(analyzed) else SentimentResult.neutral()
        enriched.append({**item.to_dict(), "sentiment": sentiment.to_dict()})
    return enriched


def process_stock(
    stock: TrackedInstrument,
    raw_news: Sequence[NewsItem],
    scorer: SentimentScorer,
    store: JsonStore,
    existing_dates: set[str],
    today: str,
    settings: RefreshSettings,
    now: datetime | None = None,
) -> tuple[int, int, list[dict[str, Any]] | None]:
    """Process one stock's news.

    Args:
        stock: Stock being processed
        raw_news: Fetched news for the stock
        scorer: Sentiment scorer
        store: Persistence for sentiment history
        existing_dates: Dates already present in the stock's history
        today: Today's date key; always reprocessed
        settings: Pipeline sizing
        now: Reference time for the recency filter

    Returns:
        (dates processed, dates skipped, scored news for the cache or None
        when the stock had no recent news)
    """
    recent_news = filter_recent_news(raw_news, days=settings.recent_days, now=now)
    if not recent_news:
        logger.info(f"No recent news found for {stock.short_name}")
        return 0, 0, None

    news_by_date = group_news_by_date(recent_news)
    logger.info(
        f"{stock.short_name}: Found news for {len(news_by_date)} dates "
        f"({len(existing_dates)} already processed)"
    )

    processed = 0
    skipped = 0
    for date_key, date_news in news_by_date.items():
        if date_key in existing_dates and date_key != today:
            skipped += 1
            continue

        data_point = aggregate_date(
            stock.symbol,
            date_key,
            date_news,
            scorer,
            max_items=settings.max_items_per_date,
        )
        store.append_sentiment_data_point(stock.symbol, data_point)
        processed += 1
        logger.info(
            f"  {date_key}: {data_point.sentiment_label} "
            f"(score: {data_point.average_sentiment:.3f}, news: {data_point.news_count})"
        )

    analyzed = scorer.score_items(list(recent_news[: settings.max_scored_display_items]))
    cached = enrich_news_with_sentiment(recent_news[: settings.max_cached_news], analyzed)
    return processed, skipped, cached


def run_refresh(
    stocks: Iterable[TrackedInstrument],
    fetcher: NewsFetcher,
    scorer: SentimentScorer,
    store: JsonStore,
    settings: RefreshSettings,
    today: date | None = None,
    now: datetime | None = None,
) -> RefreshSummary:
    """Refresh sentiment for all stocks.

    Fetches news, aggregates sentiment per date that is not yet in history
    (today is always recomputed), and replaces each stock's news cache.
    A failure for one stock is recorded in ``errors`` and the others still
    run.

    Args:
        stocks: Stocks to refresh
        fetcher: NewsFetcher implementation
        scorer: SentimentScorer implementation (holds the request quota)
        store: JsonStore for the history and news cache documents
        settings: Pipeline sizing
        today: Date treated as "today" (defaults to current UTC date)
        now: Reference time for the recency filter (defaults to now)

    Returns:
        RefreshSummary with processed stocks, date counts and errors
    """
    stocks = list(stocks)
    now = now or datetime.now(UTC)
    today_key = (today or now.date()).isoformat()
    summary = RefreshSummary()

    logger.info("Starting sentiment refresh with historical backfill...")

    all_news = fetcher.fetch_all(stocks)
    news_cache = store.load_news_cache()
    existing_history = store.load_sentiment_history()

    for stock in stocks:
        try:
            entry = existing_history["stocks"].get(stock.symbol) or {}
            existing_dates = {h["date"] for h in entry.get("history", [])}

            processed, skipped, cached = process_stock(
                stock,
                all_news.get(stock.symbol, []),
                scorer,
                store,
                existing_dates,
                today_key,
                settings,
                now=now,
            )
            summary.dates_processed += processed
            summary.dates_skipped += skipped

            if cached is None:
                continue

            store.set_cached_news(news_cache, stock.symbol, cached)
            summary.processed.append(stock.symbol)
        except Exception as e:
            logger.exception(f"Error processing {stock.symbol}: {e}")
            summary.errors.append(stock.symbol)

    news_cache["lastUpdated"] = datetime.now(UTC).isoformat()
    store.save_news_cache(news_cache)

    summary.api_requests_used = scorer.request_count
    logger.info(
        f"Refresh complete. Dates processed: {summary.dates_processed}, "
        f"skipped: {summary.dates_skipped}, "
        f"API requests used: {summary.api_requests_used}"
    )
    return summary
