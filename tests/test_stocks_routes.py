"""API-level tests for stock endpoints."""

import pytest
from fastapi.testclient import TestClient

from metal_sentiment.core.news_sentiment import SentimentDataPoint
from metal_sentiment.core.prices import PriceBar, StockQuote
from metal_sentiment.main import app
from metal_sentiment.routes.dependencies import get_data_base_path, get_price_fetcher
from metal_sentiment.routes.stocks import get_quote_delay
from metal_sentiment.storage import JsonStore

# ============================================================================
# Mock implementations for testing
# ============================================================================


class MockPriceFetcher:
    """Deterministic quotes and bars; VEDL has no market data."""

    def __init__(self, changes: list[float] | None = None):
        self.changes = changes if changes is not None else [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        self.history_calls: list[tuple[str, int]] = []

    def fetch_quote(self, yahoo_symbol):
        if yahoo_symbol == "VEDL.NS":
            return None
        return StockQuote(
            symbol=yahoo_symbol,
            current_price=110.0,
            previous_close=100.0,
            change_percent=10.0,
            day_high=112.0,
            day_low=99.0,
            volume=5000,
            timestamp="2026-10-16T10:00:00+00:00",
        )

    def fetch_history(self, yahoo_symbol, days=30):
        self.history_calls.append((yahoo_symbol, days))
        if yahoo_symbol == "VEDL.NS":
            return []
        bars = [
            PriceBar(yahoo_symbol, f"2026-10-{i + 1:02d}", 100.0, 101.0, 99.0, 100.0 + c, 1000, c)
            for i, c in enumerate(self.changes)
        ]
        return bars[-days:]


def _seed_history(data_path, symbol: str, scores: list[float]) -> None:
    store = JsonStore(data_path)
    for i, score in enumerate(scores):
        store.append_sentiment_data_point(
            symbol,
            SentimentDataPoint(
                date=f"2026-10-{i + 1:02d}",
                stock_symbol=symbol,
                average_sentiment=score,
                sentiment_label="neutral",
                news_count=1,
                positive_count=0,
                negative_count=0,
                neutral_count=1,
                top_positive_news=[],
                top_negative_news=[],
            ),
        )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "api-data"


@pytest.fixture
def price_fetcher():
    return MockPriceFetcher()


@pytest.fixture
def client(data_path, price_fetcher):
    """Test client with mocked market data."""
    app.dependency_overrides[get_data_base_path] = lambda: data_path
    app.dependency_overrides[get_price_fetcher] = lambda: price_fetcher
    app.dependency_overrides[get_quote_delay] = lambda: 0.0
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# Listing
# ============================================================================


def test_list_stocks_with_quotes(client):
    response = client.get("/api/stocks")
    assert response.status_code == 200

    data = response.json()
    assert len(data) == 7
    tata = data[0]
    assert tata["symbol"] == "TATASTEEL"
    assert tata["name"] == "Tata Steel"
    assert tata["fullName"] == "Tata Steel Limited"
    assert tata["quote"]["currentPrice"] == 110.0
    assert tata["quote"]["changePercent"] == 10.0

    vedl = next(row for row in data if row["symbol"] == "VEDL")
    assert vedl["quote"] is None


def test_list_symbols(client):
    response = client.get("/api/stocks/list/symbols")
    assert response.status_code == 200
    data = response.json()
    assert data[2] == {"symbol": "HINDALCO", "name": "Hindalco", "sector": "aluminum"}


# ============================================================================
# Detail
# ============================================================================


def test_stock_detail(client, price_fetcher, data_path):
    response = client.get("/api/stocks/NMDC")
    assert response.status_code == 200

    data = response.json()
    assert data["symbol"] == "NMDC"
    assert data["name"] == "NMDC Limited"
    assert data["yahooSymbol"] == "NMDC.NS"
    assert data["quote"]["symbol"] == "NMDC.NS"
    assert len(data["priceHistory"]) == 6
    assert price_fetcher.history_calls == [("NMDC.NS", 30)]

    cached = JsonStore(data_path).load_stock_prices()["stocks"]["NMDC"]
    assert cached["currentQuote"]["currentPrice"] == 110.0
    assert len(cached["history"]) == 6


def test_stock_detail_is_case_insensitive(client):
    assert client.get("/api/stocks/nmdc").json()["symbol"] == "NMDC"


def test_stock_detail_without_market_data(client):
    data = client.get("/api/stocks/VEDL").json()
    assert data["quote"] is None
    assert data["priceHistory"] == []


def test_unknown_stock_is_404(client):
    response = client.get("/api/stocks/RELIANCE")
    assert response.status_code == 404
    assert response.json() == {"error": "NOT_FOUND", "message": "Stock not found: RELIANCE"}


# ============================================================================
# Correlation
# ============================================================================


def test_correlation_with_aligned_data(client, data_path):
    _seed_history(data_path, "SAIL", [0.1, 0.2, 0.3, 0.4, 0.5, 0.6])

    response = client.get("/api/stocks/SAIL/correlation")
    assert response.status_code == 200

    data = response.json()
    assert data["symbol"] == "SAIL"
    assert data["period"] == "30d"
    assert data["correlation"] == pytest.approx(1.0)
    assert data["correlationStrength"] == "strong"
    assert data["dataPointsUsed"] == 6
    assert len(data["sentimentData"]) == 6
    assert len(data["priceData"]) == 6


def test_correlation_respects_period(client, data_path, price_fetcher):
    _seed_history(data_path, "SAIL", [0.1, 0.2, 0.3, 0.4, 0.5, 0.6])

    data = client.get("/api/stocks/SAIL/correlation", params={"period": 5}).json()

    assert data["period"] == "5d"
    assert price_fetcher.history_calls == [("SAIL.NS", 5)]
    assert data["dataPointsUsed"] == 5
    assert len(data["sentimentData"]) == 5


def test_correlation_insufficient_sentiment(client, data_path):
    _seed_history(data_path, "SAIL", [0.1, 0.2])

    data = client.get("/api/stocks/SAIL/correlation").json()

    assert data["correlation"] is None
    assert data["message"].startswith("Insufficient sentiment data")
    assert len(data["sentimentData"]) == 2
    assert len(data["priceData"]) == 6


def test_correlation_insufficient_prices(client, data_path):
    _seed_history(data_path, "VEDL", [0.1, 0.2, 0.3, 0.4, 0.5])

    data = client.get("/api/stocks/VEDL/correlation").json()

    assert data["correlation"] is None
    assert data["message"] == "Insufficient price data for correlation analysis."
    assert data["priceData"] == []


def test_correlation_unknown_stock_is_404(client):
    assert client.get("/api/stocks/RELIANCE/correlation").status_code == 404
