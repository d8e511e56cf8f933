"""Mapping of pipeline failures to user-facing errors."""

from enum import Enum
from typing import Optional

from ..llm.provider import (
    LLMCancelledError,
    LLMError,
    LLMRateLimitError,
    LLMResponseError,
)

QUOTA_MESSAGE = (
    "The AI service is currently experiencing high demand. Please wait a moment "
    "and try again, or contact support if the issue persists."
)
UNEXPECTED_MESSAGE = "An unexpected error occurred. Please try again."
EMPTY_INPUT_MESSAGE = "Please provide text to analyze"

QUOTA_MARKERS = ("exceeded your current quota", "429", "rate limit")


class ErrorKind(Enum):
    """Broad cause of a failed analysis."""
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    QUOTA_EXCEEDED = "quota_exceeded"
    INPUT_VALIDATION = "input_validation"
    CANCELLED = "cancelled"
    UNEXPECTED = "unexpected"


class ClassificationError(LLMError):
    """Terminal failure of one analysis, carrying presentation text."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status: Optional[int] = None,
        kind: ErrorKind = ErrorKind.UNEXPECTED
    ):
        super().__init__(message, code=code, status=status)
        self.kind = kind

    def __repr__(self) -> str:
        return f"ClassificationError({self.message!r}, kind={self.kind.value})"


def is_quota_error(error: BaseException) -> bool:
    """True if the failure looks like rate limiting or quota exhaustion."""
    if isinstance(error, LLMRateLimitError):
        return True
    message = str(error).lower()
    return any(marker in message for marker in QUOTA_MARKERS)


def get_error_message(error: BaseException) -> str:
    """User-facing message for a terminal failure."""
    if is_quota_error(error):
        return QUOTA_MESSAGE
    if isinstance(error, LLMError):
        return error.message
    return UNEXPECTED_MESSAGE


def _kind_of(error: BaseException) -> ErrorKind:
    if isinstance(error, ClassificationError):
        return error.kind
    if is_quota_error(error):
        return ErrorKind.QUOTA_EXCEEDED
    if isinstance(error, LLMCancelledError):
        return ErrorKind.CANCELLED
    if isinstance(error, LLMResponseError):
        return ErrorKind.MALFORMED_RESPONSE
    if isinstance(error, LLMError):
        return ErrorKind.TRANSPORT
    return ErrorKind.UNEXPECTED


def classify_error(error: BaseException) -> ClassificationError:
    """Wrap any failure as a ClassificationError.

    An existing ClassificationError is returned unchanged.
    """
    if isinstance(error, ClassificationError):
        return error

    return ClassificationError(
        get_error_message(error),
        code=getattr(error, "code", None),
        status=getattr(error, "status", None),
        kind=_kind_of(error),
    )
