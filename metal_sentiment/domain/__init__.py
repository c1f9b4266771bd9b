"""Domain layer: exceptions shared across the service."""

from metal_sentiment.domain.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    FetchError,
    InstrumentNotFoundError,
    ModelLoadingError,
    SentimentAPIError,
    StorageError,
)

__all__ = [
    "ConfigurationError",
    "ExternalServiceError",
    "FetchError",
    "InstrumentNotFoundError",
    "ModelLoadingError",
    "SentimentAPIError",
    "StorageError",
]
