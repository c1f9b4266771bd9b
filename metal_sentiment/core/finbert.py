"""FinBERT sentiment scoring via the HuggingFace hosted inference API.

The hosted ``ProsusAI/finbert`` model returns a label distribution per text:

    [[{"label": "positive", "score": 0.81}, {"label": "neutral", ...}, ...]]

The top label and its probability become a signed score:
positive -> +confidence, negative -> -confidence, neutral -> 0.

Scoring never raises. Quota exhaustion, HTTP errors, malformed payloads and
a model that stays in warm-up all degrade to a neutral result so a refresh
keeps going.

Usage:
    quota = RequestQuota(limit=500)
    scorer = HuggingFaceFinBERTScorer(api_key, quota=quota)
    analyzed = scorer.score_items(news_items)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Literal, Protocol

import requests

from metal_sentiment.domain.exceptions import ModelLoadingError

logger = logging.getLogger(__name__)

# FinBERT model configuration
FINBERT_MODEL = "ProsusAI/finbert"
FINBERT_API_URL = f"https://router.huggingface.co/hf-inference/models/{FINBERT_MODEL}"
FINBERT_MAX_LENGTH = 512
REQUEST_TIMEOUT_SECONDS = 30

SentimentLabel = Literal["positive", "negative", "neutral"]


def map_sentiment_to_score(label: str, confidence: float) -> float:
    """Map a FinBERT label and its probability to a score in [-1, 1]."""
    normalized = label.lower()
    if normalized == "positive":
        return confidence
    if normalized == "negative":
        return -confidence
    return 0.0


@dataclass(frozen=True)
class SentimentResult:
    """Sentiment of one text.

    Attributes:
        label: Winning label ("positive", "negative", "neutral")
        score: Signed score in [-1, 1]
        confidence: Probability of the winning label in [0, 1]
    """

    label: SentimentLabel
    score: float
    confidence: float

    @classmethod
    def neutral(cls) -> SentimentResult:
        """Fallback result used whenever scoring is not possible."""
        return cls(label="neutral", score=0.0, confidence=0.0)

    @classmethod
    def from_label(cls, label: str, confidence: float) -> SentimentResult:
        """Build a result from the model's top label."""
        normalized = label.lower()
        if normalized not in ("positive", "negative", "neutral"):
            normalized = "neutral"
        return cls(
            label=normalized,  # type: ignore[arg-type]
            score=map_sentiment_to_score(normalized, confidence),
            confidence=confidence,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "label": self.label,
            "score": self.score,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class AnalyzedNews:
    """A news item with its sentiment."""

    news_id: str
    title: str
    sentiment: SentimentResult
    analyzed_at: str = field(default_factory=lambda: datetime.now(UTC).isoformat())


class ScorableText(Protocol):
    """Anything with an id, title and description (e.g. NewsItem)."""

    id: str
    title: str
    description: str


class RequestQuota:
    """Request quota for a single refresh.

    A fresh quota is created per refresh, so concurrent readers never see a
    counter reset underneath them.
    """

    def __init__(self, limit: int = 500):
        self.limit = limit
        self.used = 0

    @property
    def available(self) -> bool:
        """True while requests remain."""
        return self.used < self.limit

    def consume(self) -> None:
        """Record one successful model request."""
        self.used += 1


def select_top_label(payload: Any) -> tuple[str, float]:
    """Pick the highest-probability label from an inference response.

    Accepts both the nested ``[[{...}, ...]]`` shape and a flat list.

    Raises:
        ValueError: If the payload has no label scores
    """
    scores = payload
    if isinstance(scores, list) and scores and isinstance(scores[0], list):
        scores = scores[0]
    if not isinstance(scores, list) or not scores:
        raise ValueError(f"Invalid response from FinBERT: {payload!r}")

    top = max(scores, key=lambda item: float(item["score"]))
    return str(top["label"]), float(top["score"])


class HuggingFaceFinBERTScorer:
    """FinBERT scorer backed by the HuggingFace inference API.

    Features:
    - Per-refresh request quota (neutral once exhausted)
    - Bounded retry while the hosted model warms up (HTTP 503)
    - Fixed delay between batch requests for the free tier
    """

    def __init__(
        self,
        api_key: str,
        quota: RequestQuota | None = None,
        api_url: str = FINBERT_API_URL,
        item_delay: float = 1.0,
        loading_wait: float = 20.0,
        max_loading_retries: int = 3,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ):
        """Initialize the scorer.

        Args:
            api_key: HuggingFace API token
            quota: Request quota for this refresh (default: 500 requests)
            api_url: Inference endpoint URL
            item_delay: Seconds between requests in score_items
            loading_wait: Seconds to wait when the model is loading
            max_loading_retries: Retries on 503 before degrading to neutral
            timeout: HTTP timeout per request
        """
        self.api_key = api_key
        self.quota = quota or RequestQuota()
        self.api_url = api_url
        self.item_delay = item_delay
        self.loading_wait = loading_wait
        self.max_loading_retries = max_loading_retries
        self.timeout = timeout

    @property
    def request_count(self) -> int:
        """Successful model requests made against the quota."""
        return self.quota.used

    def _post(self, text: str) -> SentimentResult:
        """Single inference call.

        Raises:
            ModelLoadingError: Model is warming up (HTTP 503)
            requests.RequestException: Network or HTTP failure
            ValueError: Malformed response
        """
        response = requests.post(
            self.api_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            json={
                "inputs": text[:FINBERT_MAX_LENGTH],
                "options": {"wait_for_model": True},
            },
            timeout=self.timeout,
        )
        if response.status_code == 503:
            raise ModelLoadingError()
        response.raise_for_status()

        label, confidence = select_top_label(response.json())
        self.quota.consume()
        return SentimentResult.from_label(label, confidence)

    def score(self, text: str) -> SentimentResult:
        """Score one text, degrading to neutral on any failure."""
        if not self.quota.available:
            logger.warning("Rate limit reached for this session")
            return SentimentResult.neutral()

        for attempt in range(self.max_loading_retries + 1):
            try:
                return self._post(text)
            except ModelLoadingError:
                if attempt >= self.max_loading_retries:
                    break
                logger.info(
                    f"Model is loading, waiting {self.loading_wait:.0f} seconds "
                    f"(retry {attempt + 1}/{self.max_loading_retries})..."
                )
                time.sleep(self.loading_wait)
            except (requests.RequestException, ValueError, KeyError, TypeError) as e:
                logger.error(f"Sentiment analysis failed: {e}")
                return SentimentResult.neutral()

        logger.error(
            f"Sentiment model still loading after {self.max_loading_retries} retries"
        )
        return SentimentResult.neutral()

    def score_items(self, items: Sequence[ScorableText]) -> list[AnalyzedNews]:
        """Score news items sequentially.

        Text is "<title>. <description>" truncated to the model limit. A
        failing item is recorded as neutral and the batch continues.
        """
        results: list[AnalyzedNews] = []

        for i, item in enumerate(items):
            text = f"{item.title}. {item.description}"[:FINBERT_MAX_LENGTH]
            try:
                sentiment = self.score(text)
            except Exception as e:
                logger.error(f"Failed to analyze news {item.id}: {e}")
                sentiment = SentimentResult.neutral()

            results.append(
                AnalyzedNews(news_id=item.id, title=item.title, sentiment=sentiment)
            )

            if self.item_delay and i < len(items) - 1:
                time.sleep(self.item_delay)

        return results
