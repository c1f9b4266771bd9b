"""Google News RSS fetcher.

Google News search feeds are queried once per search term of a stock,
sequentially and with a small delay to stay clear of rate limiting. Titles
come back as "Headline - Source Name"; the suffix becomes the source.
"""

import hashlib
import logging
import time
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import quote

import feedparser
import requests
from bs4 import BeautifulSoup

from metal_sentiment.core.news.models import NewsItem
from metal_sentiment.domain.exceptions import FetchError
from metal_sentiment.universe import TrackedInstrument

logger = logging.getLogger(__name__)

GOOGLE_NEWS_RSS_URL = "https://news.google.com/rss/search"
FEED_TIMEOUT_SECONDS = 10
MAX_DESCRIPTION_LENGTH = 500
UNKNOWN_SOURCE = "Unknown"
SOURCE_SEPARATOR = " - "

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


# ============================================================================
# Text helpers
# ============================================================================


def generate_news_id(link: str, pub_date: str) -> str:
    """Stable id for an article: md5 of link + raw publish date."""
    return hashlib.md5(f"{link}{pub_date}".encode()).hexdigest()


def clean_title(title: str) -> str:
    """Strip the trailing " - Source" suffix Google News appends."""
    head, sep, _ = title.rpartition(SOURCE_SEPARATOR)
    if not sep:
        return title.strip()
    return head.strip()


def extract_source(title: str) -> str:
    """Source name from the trailing " - Source" suffix, else "Unknown"."""
    _, sep, tail = title.rpartition(SOURCE_SEPARATOR)
    if not sep or not tail.strip():
        return UNKNOWN_SOURCE
    return tail.strip()


def clean_description(description: str) -> str:
    """Remove HTML markup and entities, truncate to 500 characters."""
    if not description:
        return ""
    text = BeautifulSoup(description, "html.parser").get_text(" ")
    text = " ".join(text.replace("\xa0", " ").split())
    return text[:MAX_DESCRIPTION_LENGTH]


def build_feed_url(search_term: str) -> str:
    """Google News RSS search URL for a term, scoped to Indian stock news."""
    query = quote(f"{search_term} stock India")
    return f"{GOOGLE_NEWS_RSS_URL}?q={query}&hl=en-IN&gl=IN&ceid=IN:en"


def _parse_published(entry: dict[str, Any]) -> datetime:
    """Publish time of a feed entry; falls back to now when missing."""
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if parsed:
        return datetime(*parsed[:6], tzinfo=UTC)
    return datetime.now(UTC)


def parse_feed_entry(entry: dict[str, Any], symbol: str) -> NewsItem:
    """Convert one feedparser entry into a NewsItem."""
    raw_title = entry.get("title", "") or ""
    link = entry.get("link", "") or ""
    published = _parse_published(entry)
    raw_pub_date = entry.get("published") or published.isoformat()

    return NewsItem(
        id=generate_news_id(link, raw_pub_date),
        title=clean_title(raw_title),
        description=clean_description(entry.get("summary", "") or ""),
        link=link,
        pub_date=published,
        source=extract_source(raw_title),
        stock_symbol=symbol,
    )


def deduplicate_news(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Deduplicate by id (last seen wins) and sort newest first."""
    unique: dict[str, NewsItem] = {}
    for item in items:
        unique[item.id] = item
    return sorted(unique.values(), key=lambda n: n.pub_date, reverse=True)


def filter_recent_news(
    items: Iterable[NewsItem],
    days: int = 7,
    now: datetime | None = None,
) -> list[NewsItem]:
    """Keep items published within the last ``days`` days."""
    now = now or datetime.now(UTC)
    cutoff = now - timedelta(days=days)
    return [item for item in items if item.pub_date >= cutoff]


# ============================================================================
# Fetcher
# ============================================================================


class GoogleNewsFetcher:
    """Fetch stock news from Google News RSS search feeds."""

    def __init__(
        self,
        term_delay: float = 0.3,
        stock_delay: float = 0.5,
        timeout: float = FEED_TIMEOUT_SECONDS,
    ):
        """Initialize the fetcher.

        Args:
            term_delay: Seconds to wait after each search-term query
            stock_delay: Seconds to wait between stocks in fetch_all
            timeout: HTTP timeout per feed request
        """
        self.term_delay = term_delay
        self.stock_delay = stock_delay
        self.timeout = timeout

    def _fetch_feed(self, search_term: str) -> list[dict[str, Any]]:
        """Download and parse one search feed."""
        response = requests.get(
            build_feed_url(search_term),
            headers={"User-Agent": USER_AGENT},
            timeout=self.timeout,
        )
        response.raise_for_status()
        feed = feedparser.parse(response.content)
        if feed.bozo and not feed.entries:
            raise FetchError(
                f"Unparseable feed: {feed.get('bozo_exception')}",
                service="google_news",
            )
        return list(feed.entries)

    def fetch_for_stock(self, stock: TrackedInstrument) -> list[NewsItem]:
        """Fetch news for one stock across all of its search terms.

        A failing search term is logged and skipped; the remaining terms
        still run. A malformed entry is skipped on its own.

        Returns:
            Deduplicated NewsItems, newest first
        """
        collected: list[NewsItem] = []

        for search_term in stock.search_terms:
            try:
                entries = self._fetch_feed(search_term)
            except (requests.RequestException, FetchError) as e:
                logger.error(f"Failed to fetch news for {search_term!r}: {e}")
                continue

            for entry in entries:
                try:
                    collected.append(parse_feed_entry(entry, stock.symbol))
                except (ValueError, TypeError, KeyError) as e:
                    logger.warning(f"Skipping malformed entry for {search_term!r}: {e}")

            if self.term_delay:
                time.sleep(self.term_delay)

        return deduplicate_news(collected)

    def fetch_all(
        self, stocks: Iterable[TrackedInstrument]
    ) -> dict[str, list[NewsItem]]:
        """Fetch news for every stock sequentially.

        Returns:
            Mapping of symbol -> news list (empty list if the stock failed)
        """
        stocks = list(stocks)
        news_by_symbol: dict[str, list[NewsItem]] = {}
        logger.info(f"Fetching news for {len(stocks)} stocks...")

        for i, stock in enumerate(stocks):
            logger.info(f"Fetching news for {stock.short_name} ({i + 1}/{len(stocks)})...")
            try:
                news = self.fetch_for_stock(stock)
            except Exception as e:
                logger.error(f"Failed to fetch news for {stock.symbol}: {e}")
                news = []

            news_by_symbol[stock.symbol] = news
            logger.info(f"Found {len(news)} news items for {stock.short_name}")

            if self.stock_delay and i < len(stocks) - 1:
                time.sleep(self.stock_delay)

        return news_by_symbol
