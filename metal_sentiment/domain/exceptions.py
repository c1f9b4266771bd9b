"""Custom exceptions for the metal sentiment service.

Every error surfaced to an API caller carries a short machine-readable
``code`` plus a human-readable message. Transient failures of external
collaborators (news feed, sentiment model, market data) are normally
absorbed where they happen and never reach this layer.
"""


class SentimentAPIError(Exception):
    """Base exception for all metal_sentiment errors."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        """Render the error as an API payload."""
        return {"error": self.code, "message": self.message}


# ============================================================================
# Configuration errors
# ============================================================================


class ConfigurationError(SentimentAPIError):
    """Raised when required configuration is missing.

    Examples:
    - HUGGINGFACE_API_KEY not set when a refresh is requested
    """

    code = "CONFIGURATION_ERROR"
    status_code = 500

    def __init__(self, message: str, setting: str | None = None):
        super().__init__(message)
        self.setting = setting


# ============================================================================
# Lookup errors
# ============================================================================


class InstrumentNotFoundError(SentimentAPIError):
    """Raised when a symbol is not part of the tracked universe."""

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, symbol: str):
        super().__init__(f"Stock not found: {symbol}")
        self.symbol = symbol


# ============================================================================
# External service errors
# ============================================================================


class ExternalServiceError(SentimentAPIError):
    """Base class for external service errors."""

    code = "EXTERNAL_SERVICE_ERROR"
    status_code = 502

    def __init__(self, message: str, service: str):
        super().__init__(message)
        self.service = service


class FetchError(ExternalServiceError):
    """Raised when fetching from an external service fails.

    Examples:
    - Google News RSS request times out
    - Yahoo Finance returns an unexpected payload
    """

    code = "FETCH_ERROR"

    def __init__(self, message: str, service: str, symbol: str | None = None):
        super().__init__(message, service)
        self.symbol = symbol


class ModelLoadingError(ExternalServiceError):
    """Raised when the hosted sentiment model is still warming up (HTTP 503)."""

    code = "MODEL_LOADING"
    status_code = 503

    def __init__(self, message: str = "Sentiment model is loading"):
        super().__init__(message, service="huggingface")


# ============================================================================
# Storage errors
# ============================================================================


class StorageError(SentimentAPIError):
    """Raised when a JSON document cannot be written."""

    code = "STORAGE_ERROR"

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
