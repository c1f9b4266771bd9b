"""Metal Sentiment API: news sentiment vs. price movement for Nifty Metal stocks."""

__version__ = "1.0.0"
