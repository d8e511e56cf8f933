"""Result types for AI-authorship detection."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TextCharacteristics:
    """Stylistic signals extracted from the input text.

    All flags default to False so an extractor can leave any signal
    unmeasured.
    """
    has_historical_language: bool = False
    has_complex_metaphors: bool = False
    has_emotional_depth: bool = False
    has_irregular_structure: bool = False
    has_unique_imagery: bool = False
    is_modern_language: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "hasHistoricalLanguage": self.has_historical_language,
            "hasComplexMetaphors": self.has_complex_metaphors,
            "hasEmotionalDepth": self.has_emotional_depth,
            "hasIrregularStructure": self.has_irregular_structure,
            "hasUniqueImagery": self.has_unique_imagery,
            "isModernLanguage": self.is_modern_language,
        }


@dataclass(frozen=True)
class MetricSet:
    """Synthetic quality scorecard derived from the model's confidence.

    These are illustrative numbers, not measured evaluation metrics.
    """
    accuracy: float
    f1_score: float
    roc_auc: float
    precision: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "accuracy": self.accuracy,
            "f1Score": self.f1_score,
            "rocAuc": self.roc_auc,
            "precision": self.precision,
        }


@dataclass(frozen=True)
class DetectionResult:
    """Final verdict for one analyzed text."""
    is_ai: bool
    metrics: MetricSet
    details: str
    confidence: int = 0

    @property
    def label(self) -> str:
        return "AI-GENERATED" if self.is_ai else "HUMAN-WRITTEN"

    def to_dict(self) -> Dict[str, Any]:
        """Render in the camelCase shape front-ends consume."""
        return {
            "isAI": self.is_ai,
            "confidence": self.confidence,
            "metrics": self.metrics.to_dict(),
            "details": self.details,
        }
