"""Error kinds raised by the link service."""

from typing import Any, Dict, Optional


class LinkServiceError(Exception):
    """Base exception for errors reported to callers."""

    default_code = "LINK_SERVICE_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to response format."""
        return {
            "error": self.error_code,
            "detail": self.message,
        }

    def __str__(self) -> str:
        return self.message


class InvalidInputError(LinkServiceError):
    """Raised when a URL or short code fails syntactic validation."""

    default_code = "INVALID_INPUT"


class NotFoundError(LinkServiceError):
    """Raised when a valid short code has no mapping."""

    default_code = "NOT_FOUND"


class RequestProcessingError(LinkServiceError):
    """Raised when the store fails. The message never carries store details."""

    default_code = "REQUEST_PROCESSING_FAILED"

    def __init__(self, message: str = "The request could not be processed", error_code: Optional[str] = None):
        super().__init__(message, error_code)


class StoreError(Exception):
    """Raised by store implementations for any failure other than a classified constraint violation."""
