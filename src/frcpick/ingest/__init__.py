"""Input adapters that turn exported stats and match results into records."""

from .matches import load_matches_json, match_from_dict, matches_from_dicts
from .teams import (
    DEFAULT_TEAM_MAPPING,
    TeamLoadReport,
    load_team_metrics_csv,
    parse_team_metrics_text,
    rows_to_records,
)

__all__ = [
    "DEFAULT_TEAM_MAPPING",
    "TeamLoadReport",
    "load_matches_json",
    "load_team_metrics_csv",
    "match_from_dict",
    "matches_from_dicts",
    "parse_team_metrics_text",
    "rows_to_records",
]
