"""FastAPI application entrypoint."""

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from metal_sentiment import __version__
from metal_sentiment.core.config import (
    configure_logging,
    get_cors_origins,
    is_production,
)
from metal_sentiment.domain.exceptions import SentimentAPIError
from metal_sentiment.routes import health, root, sentiment, stocks

load_dotenv()
configure_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Metal Sentiment API",
    description="News sentiment and price correlation for Nifty Metal stocks",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============================================================================
# Exception handlers
# ============================================================================


@app.exception_handler(SentimentAPIError)
async def sentiment_api_error_handler(request: Request, exc: SentimentAPIError):
    """Render service errors as {"error": code, "message": message}."""
    logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render routing errors (unknown path, wrong method) in the same shape."""
    if exc.status_code == 404:
        content = {
            "error": "NOT_FOUND",
            "message": f"Cannot {request.method} {request.url.path}",
        }
    else:
        content = {"error": "HTTP_ERROR", "message": str(exc.detail)}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Catch-all for unexpected errors; detail is hidden in production."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    message = "Something went wrong" if is_production() else str(exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": message},
    )


app.include_router(root.router)
app.include_router(health.router, prefix="/api/health", tags=["health"])
app.include_router(sentiment.router, prefix="/api/sentiment", tags=["sentiment"])
app.include_router(stocks.router, prefix="/api/stocks", tags=["stocks"])
