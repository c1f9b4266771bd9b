"""Root endpoint (service info)."""

from fastapi import APIRouter

from metal_sentiment import __version__

router = APIRouter(tags=["root"])


@router.get("/")
def read_root() -> dict:
    """Service info and endpoint listing."""
    return {
        "name": "Metal Industry Sentiment Analysis API",
        "service": "metal-sentiment-api",
        "version": __version__,
        "endpoints": {
            "health": "/api/health",
            "sentiment": {
                "overview": "GET /api/sentiment",
                "byStock": "GET /api/sentiment/{symbol}",
                "history": "GET /api/sentiment/{symbol}/history",
                "refresh": "POST /api/sentiment/refresh",
                "status": "GET /api/sentiment/status/info",
            },
            "stocks": {
                "all": "GET /api/stocks",
                "bySymbol": "GET /api/stocks/{symbol}",
                "correlation": "GET /api/stocks/{symbol}/correlation",
                "symbols": "GET /api/stocks/list/symbols",
            },
        },
    }
