"""Health check endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter

from metal_sentiment import __version__
from metal_sentiment.core.config import get_app_env

router = APIRouter()


@router.get("")
def health_check() -> dict:
    """Generic health check."""
    return {
        "status": "healthy",
        "service": "metal-sentiment-api",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": get_app_env(),
    }


@router.get("/live")
def liveness() -> dict:
    """Liveness probe - is the process running?"""
    return {"status": "alive"}
