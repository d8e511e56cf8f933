"""Synthetic scorecard derived from model confidence."""

import random
from typing import Optional

from ..models import MetricSet

BASE_FLOOR = 0.75
CONFIDENCE_WEIGHT = 0.2
VARIANCE = 0.05

# name -> (offset from base, floor, ceiling)
METRIC_BOUNDS = {
    "accuracy": (0.0, 0.60, 0.99),
    "f1_score": (-0.05, 0.55, 0.95),
    "roc_auc": (0.10, 0.65, 0.98),
    "precision": (-0.02, 0.58, 0.96),
}

_default_rng = random.Random()


def _clamp(value: float, floor: float, ceiling: float) -> float:
    return min(ceiling, max(floor, value))


def synthesize_metrics(confidence: float, rng: Optional[random.Random] = None) -> MetricSet:
    """Derive a bounded, illustrative scorecard from a confidence percentage.

    Each metric is ``0.75 + 0.2 * confidence / 100`` plus its own offset and
    a jitter in ``[-VARIANCE / 2, VARIANCE / 2]``, then clamped to its own
    range. Pass a seeded ``rng`` for reproducible values.
    """
    rng = rng or _default_rng
    base = BASE_FLOOR + (confidence / 100) * CONFIDENCE_WEIGHT

    values = {}
    for name, (offset, floor, ceiling) in METRIC_BOUNDS.items():
        jitter = (rng.random() - 0.5) * VARIANCE
        values[name] = _clamp(base + offset + jitter, floor, ceiling)

    return MetricSet(**values)
