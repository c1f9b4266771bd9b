"""Response models shared across endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentResponse(CamelModel):
    label: str
    score: float
    confidence: float


class SentimentDataPointResponse(CamelModel):
    """Aggregated sentiment for one stock on one date."""

    date: str
    stock_symbol: str
    average_sentiment: float
    sentiment_label: str
    news_count: int
    positive_count: int
    negative_count: int
    neutral_count: int
    top_positive_news: list[str] = []
    top_negative_news: list[str] = []
