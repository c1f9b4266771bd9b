"""API-level tests for sentiment endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from metal_sentiment.core.config import RefreshSettings
from metal_sentiment.core.finbert import AnalyzedNews, SentimentResult
from metal_sentiment.core.news import NewsItem
from metal_sentiment.core.news_sentiment import SentimentDataPoint
from metal_sentiment.main import app
from metal_sentiment.routes.dependencies import get_data_base_path
from metal_sentiment.routes.sentiment import (
    get_news_fetcher,
    get_refresh_settings,
    get_sentiment_scorer,
)
from metal_sentiment.storage import JsonStore

# ============================================================================
# Mock implementations for testing
# ============================================================================


class MockNewsFetcher:
    """Two recent articles for Tata Steel, nothing for other stocks."""

    def fetch_all(self, stocks):
        now = datetime.now(UTC)
        news = {s.symbol: [] for s in stocks}
        news["TATASTEEL"] = [
            NewsItem(
                id=f"tata-{i}",
                title=f"Tata Steel article {i}",
                description="Steel demand update",
                link=f"https://news.example.com/tata-{i}",
                pub_date=now - timedelta(minutes=10 * (i + 1)),
                source="Mint",
                stock_symbol="TATASTEEL",
            )
            for i in range(2)
        ]
        return news


class MockSentimentScorer:
    """Deterministic negative scores with a request counter."""

    def __init__(self):
        self.requests = 0

    @property
    def request_count(self) -> int:
        return self.requests

    def score_items(self, items):
        self.requests += len(items)
        return [
            AnalyzedNews(
                news_id=item.id,
                title=item.title,
                sentiment=SentimentResult.from_label("negative", 0.8),
            )
            for item in items
        ]


def _point(day: str, score: float) -> SentimentDataPoint:
    return SentimentDataPoint(
        date=day,
        stock_symbol="HINDALCO",
        average_sentiment=score,
        sentiment_label="bullish" if score > 0.15 else "neutral",
        news_count=2,
        positive_count=1,
        negative_count=0,
        neutral_count=1,
        top_positive_news=["Hindalco wins contract"],
        top_negative_news=[],
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "api-data"


@pytest.fixture
def client(data_path):
    """Test client reading/writing JSON documents under a temp directory."""
    app.dependency_overrides[get_data_base_path] = lambda: data_path
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_mocks(client):
    """Test client with mocked fetcher/scorer for refresh."""
    scorer = MockSentimentScorer()
    app.dependency_overrides[get_news_fetcher] = lambda: MockNewsFetcher()
    app.dependency_overrides[get_sentiment_scorer] = lambda: scorer
    app.dependency_overrides[get_refresh_settings] = lambda: RefreshSettings(
        term_delay=0, stock_delay=0, item_delay=0, loading_wait=0
    )
    return client


@pytest.fixture
def seeded_store(data_path):
    """Hindalco with 10 days of history and cached news."""
    store = JsonStore(data_path)
    for day in range(1, 11):
        store.append_sentiment_data_point("HINDALCO", _point(f"2026-10-{day:02d}", day / 20))
    store.update_news_cache(
        "HINDALCO",
        [
            {
                "id": f"h{i}",
                "title": f"Hindalco story {i}",
                "description": "",
                "link": f"https://news.example.com/h{i}",
                "pubDate": "2026-10-10T08:00:00+00:00",
                "source": "Mint",
                "stockSymbol": "HINDALCO",
                "sentiment": {"label": "positive", "score": 0.7, "confidence": 0.7},
            }
            for i in range(20)
        ],
    )
    return store


# ============================================================================
# Read endpoints
# ============================================================================


def test_overview_lists_every_stock_without_data(client):
    response = client.get("/api/sentiment")
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 7
    assert data[0]["symbol"] == "TATASTEEL"
    assert data[0]["name"] == "Tata Steel"
    assert data[0]["sector"] == "steel"
    assert data[0]["sentiment"] is None
    assert "lastUpdated" in data[0]


def test_overview_includes_current_sentiment(client, seeded_store):
    data = client.get("/api/sentiment").json()
    hindalco = next(row for row in data if row["symbol"] == "HINDALCO")

    assert hindalco["sentiment"]["date"] == "2026-10-10"
    assert hindalco["sentiment"]["averageSentiment"] == pytest.approx(0.5)
    assert hindalco["sentiment"]["sentimentLabel"] == "bullish"


def test_stock_detail(client, seeded_store):
    response = client.get("/api/sentiment/HINDALCO")
    assert response.status_code == 200

    data = response.json()
    assert data["symbol"] == "HINDALCO"
    assert data["currentSentiment"]["date"] == "2026-10-10"
    assert len(data["history"]) == 10
    assert len(data["recentNews"]) == 15
    assert data["recentNews"][0]["pubDate"] == "2026-10-10T08:00:00+00:00"
    assert data["recentNews"][0]["sentiment"]["label"] == "positive"


def test_stock_detail_without_data_returns_empty_shape(client):
    response = client.get("/api/sentiment/UNKNOWN")
    assert response.status_code == 200
    assert response.json() == {
        "symbol": "UNKNOWN",
        "currentSentiment": None,
        "history": [],
        "recentNews": [],
    }


def test_history_returns_trailing_days(client, seeded_store):
    response = client.get("/api/sentiment/HINDALCO/history", params={"days": 3})
    assert response.status_code == 200

    data = response.json()
    assert [h["date"] for h in data["history"]] == ["2026-10-08", "2026-10-09", "2026-10-10"]


def test_history_defaults_to_thirty_days(client, seeded_store):
    data = client.get("/api/sentiment/HINDALCO/history").json()
    assert len(data["history"]) == 10


def test_history_rejects_non_positive_days(client):
    response = client.get("/api/sentiment/HINDALCO/history", params={"days": 0})
    assert response.status_code == 422


def test_status_before_any_refresh(client, seeded_store):
    response = client.get("/api/sentiment/status/info")
    assert response.status_code == 200
    data = response.json()
    assert data["stocksTracked"] == 7
    assert data["stocksWithData"] == 1
    assert data["apiRequestsThisSession"] == 0


# ============================================================================
# Refresh
# ============================================================================


def test_refresh_without_api_key_is_configuration_error(client):
    response = client.post("/api/sentiment/refresh")
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "CONFIGURATION_ERROR"
    assert "HUGGINGFACE_API_KEY" in data["message"]


def test_refresh_processes_news(client_with_mocks, data_path):
    response = client_with_mocks.post("/api/sentiment/refresh")
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["processed"] == ["TATASTEEL"]
    assert data["datesProcessed"] >= 1
    assert data["datesSkipped"] == 0
    assert "errors" not in data
    # 2 items aggregated + 2 items scored for the news cache
    assert data["apiRequestsUsed"] == 4

    history = JsonStore(data_path).load_sentiment_history()["stocks"]["TATASTEEL"]
    assert history["currentSentiment"]["sentimentLabel"] == "bearish"


def test_status_reports_last_refresh_request_count(client_with_mocks):
    client_with_mocks.post("/api/sentiment/refresh")

    data = client_with_mocks.get("/api/sentiment/status/info").json()
    assert data["apiRequestsThisSession"] == 4
    assert data["stocksWithData"] == 1


def test_refreshed_news_appears_in_detail(client_with_mocks):
    client_with_mocks.post("/api/sentiment/refresh")

    data = client_with_mocks.get("/api/sentiment/TATASTEEL").json()
    assert [n["id"] for n in data["recentNews"]] == ["tata-0", "tata-1"]
    assert data["recentNews"][0]["sentiment"]["score"] == pytest.approx(-0.8)


# ============================================================================
# Error rendering
# ============================================================================


def _broken_data_path():
    raise RuntimeError("disk unavailable")


def test_unhandled_error_exposes_message_outside_production():
    app.dependency_overrides[get_data_base_path] = _broken_data_path
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/sentiment")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"error": "INTERNAL_ERROR", "message": "disk unavailable"}


def test_unhandled_error_hides_message_in_production(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")
    app.dependency_overrides[get_data_base_path] = _broken_data_path
    try:
        response = TestClient(app, raise_server_exceptions=False).get("/api/sentiment")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["message"] == "Something went wrong"
