"""JSON document storage."""

from metal_sentiment.storage.json_store import (
    HISTORY_LIMIT,
    NEWS_CACHE_FILE,
    SENTIMENT_HISTORY_FILE,
    STOCK_PRICES_FILE,
    JsonStore,
    empty_document,
    merge_data_point,
)

__all__ = [
    "HISTORY_LIMIT",
    "NEWS_CACHE_FILE",
    "SENTIMENT_HISTORY_FILE",
    "STOCK_PRICES_FILE",
    "JsonStore",
    "empty_document",
    "merge_data_point",
]
