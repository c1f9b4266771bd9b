"""Sentiment vs. price correlation.

Aligns a stock's daily average sentiment with its daily percent price change
on matching dates and reports the Pearson coefficient.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from metal_sentiment.core.prices import PriceBar

logger = logging.getLogger(__name__)

MIN_CORRELATION_POINTS = 5


def calculate_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Pearson correlation over the trailing common length of x and y.

    Returns 0.0 when fewer than two points are available or when either
    series has no variance.
    """
    n = min(len(x), len(y))
    if n < 2:
        return 0.0

    xs = np.asarray(x[-n:], dtype=float)
    ys = np.asarray(y[-n:], dtype=float)
    x_diff = xs - xs.mean()
    y_diff = ys - ys.mean()

    denominator = np.sqrt(np.sum(x_diff**2) * np.sum(y_diff**2))
    if denominator == 0:
        return 0.0
    return float(np.sum(x_diff * y_diff) / denominator)


def correlation_strength(correlation: float) -> str:
    """Human-readable strength of a correlation coefficient."""
    magnitude = abs(correlation)
    if magnitude >= 0.7:
        return "strong"
    if magnitude >= 0.4:
        return "moderate"
    if magnitude >= 0.2:
        return "weak"
    return "negligible"


@dataclass
class CorrelationResult:
    """Outcome of a sentiment/price correlation.

    ``correlation`` is None when there was not enough data, in which case
    ``message`` says why.
    """

    correlation: float | None
    correlation_strength: str | None = None
    data_points_used: int = 0
    message: str | None = None

    @property
    def sufficient(self) -> bool:
        return self.correlation is not None


def correlate_sentiment_with_price(
    history: Sequence[dict[str, Any]],
    prices: Sequence[PriceBar],
    min_points: int = MIN_CORRELATION_POINTS,
) -> CorrelationResult:
    """Correlate daily average sentiment with daily percent price change.

    Args:
        history: Sentiment history entries (``date``, ``averageSentiment``)
        prices: Daily price bars
        min_points: Minimum entries on each side and minimum overlap

    Returns:
        CorrelationResult; insufficient data yields ``correlation=None``
    """
    if len(history) < min_points:
        return CorrelationResult(
            correlation=None,
            message=(
                "Insufficient sentiment data for correlation analysis. "
                f"Need at least {min_points} days."
            ),
        )

    if len(prices) < min_points:
        return CorrelationResult(
            correlation=None,
            message="Insufficient price data for correlation analysis.",
        )

    sentiment_by_date = {h["date"]: h["averageSentiment"] for h in history}
    change_by_date = {bar.date: bar.change_percent for bar in prices}
    common_dates = [d for d in sentiment_by_date if d in change_by_date]

    if len(common_dates) < min_points:
        return CorrelationResult(
            correlation=None,
            data_points_used=len(common_dates),
            message=(
                f"Only {len(common_dates)} days of overlapping data. "
                f"Need at least {min_points} days."
            ),
        )

    correlation = calculate_correlation(
        [sentiment_by_date[d] for d in common_dates],
        [change_by_date[d] for d in common_dates],
    )
    logger.debug(f"Correlation over {len(common_dates)} dates: {correlation:.3f}")
    return CorrelationResult(
        correlation=correlation,
        correlation_strength=correlation_strength(correlation),
        data_points_used=len(common_dates),
    )
