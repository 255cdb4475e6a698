"""Pick-list ranking engine (normalization, scoring, ranking)."""

from .normalize import METRIC_DEFAULTS, NormalizedMetric, TeamNormalization, normalize_all_metrics, normalize_metric
from .picklist import (
    PickListMetadata,
    PickListResult,
    PickListStatistics,
    PickListTeam,
    RankingInvariantError,
    aggregate_scouting_notes,
    attach_notes,
    calculate_pick_list_statistics,
    generate_pick_list,
    mark_team_picked,
    rank_teams,
)
from .scoring import (
    WeightValidation,
    calculate_composite_score,
    extract_strengths,
    extract_weaknesses,
    validate_weights,
)

__all__ = [
    "METRIC_DEFAULTS",
    "NormalizedMetric",
    "PickListMetadata",
    "PickListResult",
    "PickListStatistics",
    "PickListTeam",
    "RankingInvariantError",
    "TeamNormalization",
    "WeightValidation",
    "aggregate_scouting_notes",
    "attach_notes",
    "calculate_composite_score",
    "calculate_pick_list_statistics",
    "extract_strengths",
    "extract_weaknesses",
    "generate_pick_list",
    "mark_team_picked",
    "normalize_all_metrics",
    "normalize_metric",
    "rank_teams",
    "validate_weights",
]
