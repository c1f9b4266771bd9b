"""News module.

- Fetches per-stock news from Google News RSS search feeds
- Cleans titles/descriptions and derives stable article ids
- Deduplicates and filters by recency
"""

from metal_sentiment.core.news.fetcher import (
    GoogleNewsFetcher,
    build_feed_url,
    clean_description,
    clean_title,
    deduplicate_news,
    extract_source,
    filter_recent_news,
    generate_news_id,
    parse_feed_entry,
)
from metal_sentiment.core.news.models import NewsItem
from metal_sentiment.core.news.protocols import NewsFetcher

__all__ = [
    "GoogleNewsFetcher",
    "NewsFetcher",
    "NewsItem",
    "build_feed_url",
    "clean_description",
    "clean_title",
    "deduplicate_news",
    "extract_source",
    "filter_recent_news",
    "generate_news_id",
    "parse_feed_entry",
]
