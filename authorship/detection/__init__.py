"""AI-authorship detection pipeline."""

from .features import (
    FeatureExtractor,
    HeuristicFeatureExtractor,
    NullFeatureExtractor,
    extract_characteristics,
)
from .prompt_builder import PromptBuilder, DetectionPrompt
from .parser import ParsedVerdict, parse_detection_response
from .metrics import synthesize_metrics, METRIC_BOUNDS
from .errors import (
    ClassificationError,
    ErrorKind,
    classify_error,
    get_error_message,
    is_quota_error,
)
from .detector import AIDetector, analyze_text

__all__ = [
    # Features
    "FeatureExtractor",
    "HeuristicFeatureExtractor",
    "NullFeatureExtractor",
    "extract_characteristics",
    # Prompt
    "PromptBuilder",
    "DetectionPrompt",
    # Parsing and scoring
    "ParsedVerdict",
    "parse_detection_response",
    "synthesize_metrics",
    "METRIC_BOUNDS",
    # Errors
    "ClassificationError",
    "ErrorKind",
    "classify_error",
    "get_error_message",
    "is_quota_error",
    # Pipeline
    "AIDetector",
    "analyze_text",
]
