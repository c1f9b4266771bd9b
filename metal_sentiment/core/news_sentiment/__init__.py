"""News sentiment module.

This module turns fetched news into persisted sentiment history:
- Groups news by UTC publish date
- Scores each date's top items with FinBERT and aggregates them
- Runs the refresh pipeline across all tracked stocks
"""

# Aggregation
from metal_sentiment.core.news_sentiment.aggregation import (
    aggregate_date,
    build_data_point,
    calculate_aggregate_sentiment,
    compute_sentiment_label,
    group_news_by_date,
    top_headlines,
)

# Models
from metal_sentiment.core.news_sentiment.models import (
    AggregateSentiment,
    RefreshSummary,
    SentimentDataPoint,
)

# Processor
from metal_sentiment.core.news_sentiment.processor import (
    enrich_news_with_sentiment,
    process_stock,
    run_refresh,
)

# Protocols
from metal_sentiment.core.news_sentiment.protocols import SentimentScorer

__all__ = [
    "AggregateSentiment",
    "RefreshSummary",
    "SentimentDataPoint",
    "SentimentScorer",
    "aggregate_date",
    "build_data_point",
    "calculate_aggregate_sentiment",
    "compute_sentiment_label",
    "enrich_news_with_sentiment",
    "group_news_by_date",
    "process_stock",
    "run_refresh",
    "top_headlines",
]
