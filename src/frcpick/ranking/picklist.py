"""Pick-list generation: filter, normalize, score, rank and summarize."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from statistics import fmean, median, pstdev
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from frcpick.config import PickListStrategy, WeightConfiguration, custom_strategy, get_strategy
from frcpick.models import RawTeamMetrics
from frcpick.ranking.normalize import normalize_all_metrics
from frcpick.ranking.scoring import (
    calculate_composite_score,
    extract_strengths,
    extract_weaknesses,
    validate_weights,
)
from frcpick.settings import default_min_matches


logger = logging.getLogger(__name__)


class RankingInvariantError(RuntimeError):
    """Raised when internal normalization state does not cover the ranked pool."""


@dataclass(frozen=True)
class PickListTeam:
    team_number: int
    matches_played: int
    opr: float
    dpr: float
    ccwm: float
    composite_score: float
    rank: int
    strengths: Tuple[str, ...] = ()
    weaknesses: Tuple[str, ...] = ()
    picked: bool = False
    team_name: Optional[str] = None
    team_nickname: Optional[str] = None
    avg_total_score: Optional[float] = None
    avg_auto_score: Optional[float] = None
    avg_teleop_score: Optional[float] = None
    avg_endgame_score: Optional[float] = None
    reliability_score: Optional[float] = None
    avg_defense_rating: Optional[float] = None
    avg_driver_skill: Optional[float] = None
    avg_speed_rating: Optional[float] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PickListStatistics:
    avg_composite_score: float = 0.0
    median_composite_score: float = 0.0
    std_dev_composite_score: float = 0.0
    avg_opr: float = 0.0
    avg_dpr: float = 0.0
    avg_ccwm: float = 0.0


@dataclass(frozen=True)
class PickListMetadata:
    avg_composite_score: float
    median_composite_score: float
    std_dev_composite_score: float
    avg_opr: float
    avg_dpr: float
    avg_ccwm: float
    teams_filtered: int
    warnings: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class PickListResult:
    event_key: str
    teams: List[PickListTeam]
    strategy: PickListStrategy
    generated_at: datetime
    total_teams: int
    min_matches_filter: int
    metadata: PickListMetadata
    event_name: Optional[str] = None


def _to_pick_list_team(
    team: RawTeamMetrics,
    *,
    composite_score: float,
    strengths: Sequence[str],
    weaknesses: Sequence[str],
) -> PickListTeam:
    return PickListTeam(
        team_number=team.team_number,
        team_name=team.team_name,
        team_nickname=team.team_nickname,
        matches_played=team.matches_played,
        opr=team.opr,
        dpr=team.dpr,
        ccwm=team.ccwm,
        avg_total_score=team.avg_total_score,
        avg_auto_score=team.avg_auto_score,
        avg_teleop_score=team.avg_teleop_score,
        avg_endgame_score=team.avg_endgame_score,
        reliability_score=team.reliability_score,
        avg_defense_rating=team.avg_defense_rating,
        avg_driver_skill=team.avg_driver_skill,
        avg_speed_rating=team.avg_speed_rating,
        composite_score=composite_score,
        rank=0,
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        notes=team.notes,
    )


def rank_teams(
    raw_teams: Sequence[RawTeamMetrics],
    weights: WeightConfiguration,
    min_matches: int = 5,
) -> List[PickListTeam]:
    """Rank teams that played at least ``min_matches`` by composite score.

    Equal scores keep their input order. Returns an empty list when no team
    qualifies.
    """

    eligible = [team for team in raw_teams if team.matches_played >= min_matches]
    if not eligible:
        return []

    normalized_map = normalize_all_metrics(eligible)

    scored: List[PickListTeam] = []
    for team in eligible:
        normalized = normalized_map.get(team.team_number)
        if normalized is None:
            raise RankingInvariantError(f"Normalization failed for team {team.team_number}")
        scored.append(
            _to_pick_list_team(
                team,
                composite_score=calculate_composite_score(normalized, weights),
                strengths=extract_strengths(normalized),
                weaknesses=extract_weaknesses(normalized),
            )
        )

    # list.sort is stable, so ties stay in input order.
    scored.sort(key=lambda entry: entry.composite_score, reverse=True)
    return [replace(entry, rank=index) for index, entry in enumerate(scored, start=1)]


def calculate_pick_list_statistics(teams: Sequence[PickListTeam]) -> PickListStatistics:
    """Population statistics over a ranked list; all zeros when empty."""

    if not teams:
        return PickListStatistics()

    scores = [team.composite_score for team in teams]
    return PickListStatistics(
        avg_composite_score=round(fmean(scores), 4),
        median_composite_score=round(median(scores), 4),
        std_dev_composite_score=round(pstdev(scores), 4),
        avg_opr=round(fmean(team.opr for team in teams), 2),
        avg_dpr=round(fmean(team.dpr for team in teams), 2),
        avg_ccwm=round(fmean(team.ccwm for team in teams), 2),
    )


def generate_pick_list(
    event_key: str,
    raw_teams: Sequence[RawTeamMetrics],
    *,
    strategy_id: str | None = None,
    weights: WeightConfiguration | None = None,
    min_matches: int | None = None,
    event_name: str | None = None,
) -> PickListResult:
    """Build a complete pick list for an event.

    Exactly one of ``strategy_id`` or ``weights`` selects the weighting; an
    unknown strategy id raises ``KeyError``. Data-quality problems are
    reported in ``metadata.warnings`` instead of raising.
    """

    if strategy_id is not None and weights is not None:
        raise ValueError("Pass either strategy_id or weights, not both")
    if weights is not None:
        strategy = custom_strategy(weights)
    else:
        strategy = get_strategy(strategy_id or "BALANCED")

    threshold = default_min_matches() if min_matches is None else max(0, min_matches)
    logger.info(
        "Generating pick list for %s with strategy %s (min matches %d)",
        event_key,
        strategy.id,
        threshold,
    )

    validation = validate_weights(strategy.weights)
    warnings = list(validation.warnings)
    if not validation.valid:
        logger.warning("Weight validation warnings for %s: %s", event_key, "; ".join(warnings))

    teams_filtered = sum(1 for team in raw_teams if team.matches_played < threshold)
    ranked = rank_teams(raw_teams, strategy.weights, threshold)

    if not raw_teams:
        warnings.append(f"No team statistics supplied for event {event_key}")
    elif not ranked:
        warnings.append(
            f"No teams met the minimum matches criteria ({threshold} matches). "
            "Consider lowering the threshold."
        )
    elif teams_filtered:
        noun = "team" if teams_filtered == 1 else "teams"
        warnings.append(f"{teams_filtered} {noun} excluded for insufficient matches")

    stats = calculate_pick_list_statistics(ranked)
    metadata = PickListMetadata(
        avg_composite_score=stats.avg_composite_score,
        median_composite_score=stats.median_composite_score,
        std_dev_composite_score=stats.std_dev_composite_score,
        avg_opr=stats.avg_opr,
        avg_dpr=stats.avg_dpr,
        avg_ccwm=stats.avg_ccwm,
        teams_filtered=teams_filtered,
        warnings=warnings,
    )

    logger.info(
        "Pick list for %s ranked %d teams (%d filtered out)",
        event_key,
        len(ranked),
        teams_filtered,
    )
    return PickListResult(
        event_key=event_key,
        event_name=event_name,
        teams=ranked,
        strategy=strategy,
        generated_at=datetime.now(timezone.utc),
        total_teams=len(raw_teams),
        min_matches_filter=threshold,
        metadata=metadata,
    )


def mark_team_picked(result: PickListResult, team_number: int, picked: bool = True) -> PickListResult:
    """Return a copy of ``result`` with one team's ``picked`` flag set; ranks are untouched."""

    teams = [
        replace(team, picked=picked) if team.team_number == team_number else team
        for team in result.teams
    ]
    return replace(result, teams=teams)


def aggregate_scouting_notes(entries: Iterable[Mapping[str, object]]) -> dict[int, str]:
    """Join per-team scouting entries into one note string per team.

    Each entry carries ``team_number`` and optional ``strengths``,
    ``weaknesses`` and ``notes`` text.
    """

    collected: dict[int, list[str]] = {}
    for entry in entries:
        team_number = int(entry["team_number"])  # type: ignore[arg-type]
        parts = collected.setdefault(team_number, [])
        strengths = entry.get("strengths")
        weaknesses = entry.get("weaknesses")
        notes = entry.get("notes")
        if strengths:
            parts.append(f"Strengths: {strengths}")
        if weaknesses:
            parts.append(f"Weaknesses: {weaknesses}")
        if notes:
            parts.append(str(notes))
    return {team: " | ".join(parts) for team, parts in collected.items() if parts}


def attach_notes(teams: Sequence[RawTeamMetrics], notes: Mapping[int, str]) -> List[RawTeamMetrics]:
    return [
        team.model_copy(update={"notes": notes[team.team_number]})
        if team.team_number in notes
        else team
        for team in teams
    ]


__all__ = [
    "PickListMetadata",
    "PickListResult",
    "PickListStatistics",
    "PickListTeam",
    "RankingInvariantError",
    "aggregate_scouting_notes",
    "attach_notes",
    "calculate_pick_list_statistics",
    "generate_pick_list",
    "mark_team_picked",
    "rank_teams",
]
