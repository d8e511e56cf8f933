"""Data models for the detection pipeline."""

from .base import (
    Message,
    MessageRole,
    LLMResponse,
)
from .detection import (
    TextCharacteristics,
    MetricSet,
    DetectionResult,
)

__all__ = [
    "Message",
    "MessageRole",
    "LLMResponse",
    "TextCharacteristics",
    "MetricSet",
    "DetectionResult",
]
