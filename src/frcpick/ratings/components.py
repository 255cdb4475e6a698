"""Component OPR estimates from alliance score breakdowns.

Hub and tower points are only reported per alliance, so each sub-score is
attributed to teams with its own least-squares solve. The solves are
independent and run concurrently; one failing leaves the others intact.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from statistics import fmean
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from frcpick.models import Alliance, MatchRecord, RawTeamMetrics
from frcpick.ratings.solver import (
    RatingResult,
    ScoreExtractor,
    calculate_ccwm,
    calculate_component_opr,
    calculate_dpr,
    calculate_opr,
    validate_rating_results,
)
from frcpick.settings import opr_workers


logger = logging.getLogger(__name__)


def _breakdown_value(path: Tuple[str, ...]) -> ScoreExtractor:
    def extract(match: MatchRecord, alliance: Alliance) -> Optional[float]:
        node: Any = match.alliance_breakdown(alliance)
        if node is None:
            return None
        for key in path:
            if not isinstance(node, Mapping):
                return 0.0
            node = node.get(key)
        if node is None:
            return 0.0
        return float(node)

    return extract


AUTO = "auto"
TELEOP_HUB = "teleop_hub"
ENDGAME = "endgame"
TOTAL_HUB = "total_hub"

DEFAULT_COMPONENTS: Mapping[str, ScoreExtractor] = {
    AUTO: _breakdown_value(("totalAutoPoints",)),
    TELEOP_HUB: _breakdown_value(("hubScore", "teleopPoints")),
    ENDGAME: _breakdown_value(("endGameTowerPoints",)),
    TOTAL_HUB: _breakdown_value(("hubScore", "totalPoints")),
}


@dataclass(frozen=True)
class ComponentOPRs:
    """Per-component team estimates; a failed component maps to an empty dict."""

    values: Dict[str, Dict[int, float]]
    failures: Dict[str, str] = field(default_factory=dict)

    def get(self, component: str) -> Dict[int, float]:
        return self.values.get(component, {})


def calculate_all_component_oprs(
    event_key: str,
    matches: Sequence[MatchRecord],
    components: Mapping[str, ScoreExtractor] | None = None,
    *,
    workers: int | None = None,
) -> ComponentOPRs:
    """Solve every component concurrently and collect per-team estimates."""

    extractors = dict(DEFAULT_COMPONENTS if components is None else components)
    if not extractors:
        return ComponentOPRs(values={})

    match_list = list(matches)
    worker_count = min(workers or opr_workers(), len(extractors))

    values: Dict[str, Dict[int, float]] = {}
    failures: Dict[str, str] = {}
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="component-opr") as executor:
        futures: Dict[str, Future[RatingResult]] = {
            name: executor.submit(
                calculate_component_opr,
                event_key,
                match_list,
                extractor,
                metric=f"{name}_opr",
            )
            for name, extractor in extractors.items()
        }
        for name, future in futures.items():
            try:
                result = future.result()
            except Exception as exc:  # each component degrades independently
                logger.warning("Component OPR %s failed for %s: %s", name, event_key, exc)
                values[name] = {}
                failures[name] = str(exc)
                continue
            for warning in result.warnings:
                logger.info("Component OPR %s for %s: %s", name, event_key, warning)
            values[name] = result.as_dict()

    return ComponentOPRs(values=values, failures=failures)


_COMPONENT_FIELDS: Tuple[Tuple[str, str], ...] = (
    (AUTO, "avg_auto_score"),
    (TELEOP_HUB, "avg_teleop_score"),
    (ENDGAME, "avg_endgame_score"),
)


def apply_component_oprs(
    teams: Sequence[RawTeamMetrics],
    components: ComponentOPRs,
) -> List[RawTeamMetrics]:
    """Fill missing phase averages from component estimates.

    Values already present on a team win. Teams without an estimate keep
    ``None`` and fall back to the normalizer's neutral default.
    """

    enriched: List[RawTeamMetrics] = []
    for team in teams:
        update: Dict[str, float] = {}
        for component, attr in _COMPONENT_FIELDS:
            if getattr(team, attr) is not None:
                continue
            estimate = components.get(component).get(team.team_number)
            if estimate is not None:
                update[attr] = estimate
        enriched.append(team.model_copy(update=update) if update else team)
    return enriched


@dataclass(frozen=True)
class EventRatings:
    opr: RatingResult
    dpr: RatingResult
    warnings: List[str]


def calculate_event_ratings(event_key: str, matches: Sequence[MatchRecord]) -> EventRatings:
    """OPR and DPR for an event's completed matches, with sanity warnings."""

    completed = [match for match in matches if match.is_complete]
    opr = calculate_opr(event_key, completed)
    dpr = calculate_dpr(event_key, completed)
    warnings = [
        *opr.warnings,
        *dpr.warnings,
        *validate_rating_results(opr),
        *validate_rating_results(dpr),
    ]
    return EventRatings(opr=opr, dpr=dpr, warnings=warnings)


def build_team_metrics(
    event_key: str,
    matches: Sequence[MatchRecord],
    *,
    include_components: bool = True,
) -> List[RawTeamMetrics]:
    """Derive ranking inputs for every team from match results alone."""

    ratings = calculate_event_ratings(event_key, matches)
    completed = [match for match in matches if match.is_complete]

    alliance_scores: Dict[int, List[float]] = {}
    for match in completed:
        for alliance in ("red", "blue"):
            score = match.score(alliance)
            for team in match.teams(alliance):
                alliance_scores.setdefault(team, []).append(float(score))

    teams = [
        RawTeamMetrics(
            team_number=entry.team_number,
            matches_played=entry.matches_played,
            opr=entry.opr,
            dpr=entry.dpr,
            ccwm=entry.ccwm,
            avg_total_score=(
                round(fmean(alliance_scores[entry.team_number]), 2)
                if alliance_scores.get(entry.team_number)
                else None
            ),
        )
        for entry in calculate_ccwm(ratings.opr, ratings.dpr)
    ]
    teams.sort(key=lambda team: team.team_number)

    if include_components:
        components = calculate_all_component_oprs(event_key, completed)
        teams = apply_component_oprs(teams, components)
    return teams


__all__ = [
    "AUTO",
    "ComponentOPRs",
    "DEFAULT_COMPONENTS",
    "ENDGAME",
    "EventRatings",
    "TELEOP_HUB",
    "TOTAL_HUB",
    "apply_component_oprs",
    "build_team_metrics",
    "calculate_all_component_oprs",
    "calculate_event_ratings",
]
