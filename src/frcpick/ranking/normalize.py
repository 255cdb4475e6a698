"""Min-max normalization of team metrics across a candidate pool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Sequence, Tuple

from frcpick.models import RawTeamMetrics


@dataclass(frozen=True)
class NormalizedMetric:
    """A single metric rescaled against the pool's range."""

    original: float
    normalized: float
    min: float
    max: float
    range: float


@dataclass(frozen=True)
class TeamNormalization:
    """Every tracked metric for one team, normalized to [0, 1]."""

    team_number: int
    opr: NormalizedMetric
    dpr: NormalizedMetric
    ccwm: NormalizedMetric
    auto_score: NormalizedMetric
    teleop_score: NormalizedMetric
    endgame_score: NormalizedMetric
    reliability: NormalizedMetric
    driver_skill: NormalizedMetric
    defense_rating: NormalizedMetric
    speed_rating: NormalizedMetric

    def value(self, metric: str) -> float:
        return getattr(self, metric).normalized


# Values substituted when an optional field is missing. Qualitative ratings use
# the midpoint of the 1-5 scale; reliability assumes a clean record.
METRIC_DEFAULTS: Mapping[str, float] = {
    "auto_score": 0.0,
    "teleop_score": 0.0,
    "endgame_score": 0.0,
    "reliability": 100.0,
    "driver_skill": 3.0,
    "defense_rating": 3.0,
    "speed_rating": 3.0,
}


def _optional(attr: str, metric: str) -> Callable[[RawTeamMetrics], float]:
    default = METRIC_DEFAULTS[metric]

    def extract(team: RawTeamMetrics) -> float:
        value = getattr(team, attr)
        return default if value is None else float(value)

    return extract


# (metric, extractor, invert) in the fixed metric order. Lower DPR is better.
_METRIC_SOURCES: Tuple[Tuple[str, Callable[[RawTeamMetrics], float], bool], ...] = (
    ("opr", lambda team: float(team.opr), False),
    ("dpr", lambda team: float(team.dpr), True),
    ("ccwm", lambda team: float(team.ccwm), False),
    ("auto_score", _optional("avg_auto_score", "auto_score"), False),
    ("teleop_score", _optional("avg_teleop_score", "teleop_score"), False),
    ("endgame_score", _optional("avg_endgame_score", "endgame_score"), False),
    ("reliability", _optional("reliability_score", "reliability"), False),
    ("driver_skill", _optional("avg_driver_skill", "driver_skill"), False),
    ("defense_rating", _optional("avg_defense_rating", "defense_rating"), False),
    ("speed_rating", _optional("avg_speed_rating", "speed_rating"), False),
)


def metric_value(team: RawTeamMetrics, metric: str) -> float:
    """Return the raw value used for ``metric``, with missing-field defaults applied."""

    for name, extract, _ in _METRIC_SOURCES:
        if name == metric:
            return extract(team)
    raise KeyError(f"Unknown metric {metric!r}")


def normalize_metric(
    value: float,
    min_value: float,
    max_value: float,
    invert: bool = False,
) -> NormalizedMetric:
    """Scale ``value`` into [0, 1] against ``min_value``..``max_value``.

    A zero-width range maps every value to 0.5. Values outside the range are
    clamped, and the result is rounded to four decimals.
    """

    value_range = max_value - min_value
    if value_range == 0:
        return NormalizedMetric(
            original=value,
            normalized=0.5,
            min=min_value,
            max=max_value,
            range=0.0,
        )

    scaled = (value - min_value) / value_range
    if invert:
        scaled = 1.0 - scaled
    scaled = max(0.0, min(1.0, scaled))

    return NormalizedMetric(
        original=value,
        normalized=round(scaled, 4),
        min=min_value,
        max=max_value,
        range=value_range,
    )


def normalize_all_metrics(teams: Sequence[RawTeamMetrics]) -> Dict[int, TeamNormalization]:
    """Normalize every tracked metric for each team against the pool's min/max."""

    if not teams:
        return {}

    columns: dict[str, list[float]] = {
        name: [extract(team) for team in teams] for name, extract, _ in _METRIC_SOURCES
    }
    ranges = {name: (min(values), max(values)) for name, values in columns.items()}

    normalized: Dict[int, TeamNormalization] = {}
    for index, team in enumerate(teams):
        per_metric: dict[str, NormalizedMetric] = {}
        for name, _, invert in _METRIC_SOURCES:
            low, high = ranges[name]
            per_metric[name] = normalize_metric(columns[name][index], low, high, invert)
        normalized[team.team_number] = TeamNormalization(team_number=team.team_number, **per_metric)
    return normalized


__all__ = [
    "METRIC_DEFAULTS",
    "NormalizedMetric",
    "TeamNormalization",
    "metric_value",
    "normalize_all_metrics",
    "normalize_metric",
]
