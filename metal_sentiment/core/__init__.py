"""Core pipeline logic: news, sentiment, prices, correlation."""
