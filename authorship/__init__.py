"""Authorship verification: classify text as AI-generated or human-written."""

__version__ = "0.1.0"

from .config import Config, load_config
from .models import DetectionResult, MetricSet, TextCharacteristics
from .detection import AIDetector, ClassificationError, ErrorKind, analyze_text

__all__ = [
    "__version__",
    "Config",
    "load_config",
    "DetectionResult",
    "MetricSet",
    "TextCharacteristics",
    "AIDetector",
    "ClassificationError",
    "ErrorKind",
    "analyze_text",
]
