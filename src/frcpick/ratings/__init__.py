"""Least-squares team rating estimators."""

from .components import (
    AUTO,
    DEFAULT_COMPONENTS,
    ENDGAME,
    TELEOP_HUB,
    TOTAL_HUB,
    ComponentOPRs,
    EventRatings,
    apply_component_oprs,
    build_team_metrics,
    calculate_all_component_oprs,
    calculate_event_ratings,
)
from .solver import (
    CCWMRating,
    InsufficientMatchDataError,
    RatingCalculationError,
    RatingResult,
    TeamRating,
    calculate_ccwm,
    calculate_component_opr,
    calculate_dpr,
    calculate_opr,
    solve_ratings,
    validate_rating_results,
)

__all__ = [
    "AUTO",
    "CCWMRating",
    "ComponentOPRs",
    "DEFAULT_COMPONENTS",
    "ENDGAME",
    "EventRatings",
    "InsufficientMatchDataError",
    "RatingCalculationError",
    "RatingResult",
    "TELEOP_HUB",
    "TOTAL_HUB",
    "TeamRating",
    "apply_component_oprs",
    "build_team_metrics",
    "calculate_all_component_oprs",
    "calculate_ccwm",
    "calculate_component_opr",
    "calculate_dpr",
    "calculate_event_ratings",
    "calculate_opr",
    "solve_ratings",
    "validate_rating_results",
]
