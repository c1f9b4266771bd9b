"""Stock endpoints: quotes, price history and sentiment/price correlation."""

from metal_sentiment.routes.stocks.endpoints import get_quote_delay, router

__all__ = ["get_quote_delay", "router"]
