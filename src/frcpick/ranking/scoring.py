"""Composite scoring, strength/weakness labels and weight validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from frcpick.config import WeightConfiguration
from frcpick.ranking.normalize import TeamNormalization


WEIGHT_SUM_RANGE: Tuple[float, float] = (0.5, 2.0)

# (metric, fixed threshold or None for the caller's threshold, label).
# Order here is the order labels are reported in.
_STRENGTH_RULES: Tuple[Tuple[str, Optional[float], str], ...] = (
    ("opr", None, "High offensive output (OPR)"),
    ("dpr", None, "Strong defense (low DPR)"),
    ("ccwm", None, "Excellent net contribution (CCWM)"),
    ("auto_score", None, "Consistent autonomous performance"),
    ("teleop_score", None, "High teleop scoring"),
    ("endgame_score", None, "Reliable endgame performance"),
    ("reliability", 0.9, "Extremely reliable robot"),
    ("driver_skill", None, "Skilled drivers"),
    ("defense_rating", None, "Good defensive play"),
    ("speed_rating", None, "Fast cycle times"),
)

_WEAKNESS_RULES: Tuple[Tuple[str, Optional[float], str], ...] = (
    ("opr", None, "Lower offensive output"),
    ("dpr", None, "Defense needs improvement (high DPR)"),
    ("ccwm", None, "Low net contribution"),
    ("auto_score", None, "Inconsistent autonomous"),
    ("endgame_score", None, "Unreliable endgame"),
    ("reliability", 0.7, "Reliability concerns"),
    ("driver_skill", None, "Driver skill could improve"),
    ("speed_rating", None, "Slower cycle times"),
)


@dataclass(frozen=True)
class WeightValidation:
    valid: bool
    warnings: List[str] = field(default_factory=list)


def calculate_composite_score(
    normalized: TeamNormalization,
    weights: WeightConfiguration,
) -> float:
    """Weighted mean of the normalized metrics, rounded to four decimals.

    Dividing by the weight sum keeps the score on a 0-1 scale however the
    weights are scaled. A zero weight sum scores 0.0.
    """

    total = 0.0
    weight_sum = 0.0
    for metric, weight in weights.items():
        total += weight * normalized.value(metric)
        weight_sum += weight

    if weight_sum == 0:
        return 0.0
    return round(total / weight_sum, 4)


def extract_strengths(normalized: TeamNormalization, threshold: float = 0.7) -> List[str]:
    """Labels for metrics at or above ``threshold`` (reliability uses 0.9)."""

    strengths: List[str] = []
    for metric, fixed, label in _STRENGTH_RULES:
        limit = threshold if fixed is None else fixed
        if normalized.value(metric) >= limit:
            strengths.append(label)
    return strengths


def extract_weaknesses(normalized: TeamNormalization, threshold: float = 0.3) -> List[str]:
    """Labels for metrics at or below ``threshold`` (reliability uses 0.7)."""

    weaknesses: List[str] = []
    for metric, fixed, label in _WEAKNESS_RULES:
        limit = threshold if fixed is None else fixed
        if normalized.value(metric) <= limit:
            weaknesses.append(label)
    return weaknesses


def validate_weights(weights: WeightConfiguration) -> WeightValidation:
    """Advisory checks on a weight configuration; never rejects it."""

    warnings: List[str] = []
    for metric, value in weights.items():
        if value < 0:
            warnings.append(f"Negative weight for {metric}: {value:g}")

    total = weights.total
    low, high = WEIGHT_SUM_RANGE
    if total == 0:
        warnings.append("All weights are zero - pick list will be meaningless")
    elif total < low or total > high:
        warnings.append(
            f"Weight sum is {total:.2f} - recommended range is {low} to {high} for interpretability"
        )

    return WeightValidation(valid=not warnings, warnings=warnings)


__all__ = [
    "WEIGHT_SUM_RANGE",
    "WeightValidation",
    "calculate_composite_score",
    "extract_strengths",
    "extract_weaknesses",
    "validate_weights",
]
