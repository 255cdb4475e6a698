"""Least-squares power ratings (OPR, DPR, CCWM and component OPR).

Each alliance appearance is one equation: the alliance's score equals the sum
of its member teams' contributions. Stacking every alliance of every usable
match gives an over-determined system ``A x = b`` that is solved in the
least-squares sense.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from frcpick.models import Alliance, MatchRecord


logger = logging.getLogger(__name__)

MIN_MATCHES = 3
MIN_TEAMS = 3
LOW_MATCH_WARNING = 3
HIGH_RATING_WARNING = 200.0

ScoreExtractor = Callable[[MatchRecord, Alliance], Optional[float]]

_ALLIANCES: Tuple[Alliance, Alliance] = ("red", "blue")
_OPPONENT: Dict[Alliance, Alliance] = {"red": "blue", "blue": "red"}


class RatingCalculationError(RuntimeError):
    """Raised when a rating system cannot be solved."""


class InsufficientMatchDataError(RatingCalculationError):
    """Raised when there are too few matches or teams to build a system."""


@dataclass(frozen=True)
class TeamRating:
    team_number: int
    value: float
    matches_played: int


@dataclass(frozen=True)
class RatingResult:
    event_key: str
    metric: str
    teams: List[TeamRating]
    total_matches: int
    calculated_at: datetime
    warnings: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[int, float]:
        return {rating.team_number: rating.value for rating in self.teams}


@dataclass(frozen=True)
class CCWMRating:
    team_number: int
    opr: float
    dpr: float
    ccwm: float
    matches_played: int


def own_score(match: MatchRecord, alliance: Alliance) -> Optional[float]:
    return match.score(alliance)


def opponent_score(match: MatchRecord, alliance: Alliance) -> Optional[float]:
    return match.score(_OPPONENT[alliance])


def _unique_teams(matches: Sequence[MatchRecord]) -> List[int]:
    teams: set[int] = set()
    for match in matches:
        teams.update(match.red_teams)
        teams.update(match.blue_teams)
    return sorted(teams)


def _count_matches(matches: Sequence[MatchRecord], team_number: int) -> int:
    return sum(1 for match in matches if match.has_team(team_number))


def _build_system(
    matches: Sequence[MatchRecord],
    teams: Sequence[int],
    extractor: ScoreExtractor,
) -> Tuple[np.ndarray, np.ndarray]:
    index = {team: i for i, team in enumerate(teams)}
    rows: list[np.ndarray] = []
    scores: list[float] = []
    for match in matches:
        for alliance in _ALLIANCES:
            value = extractor(match, alliance)
            if value is None:
                continue
            row = np.zeros(len(teams))
            for team in match.teams(alliance):
                column = index.get(team)
                if column is not None:
                    row[column] = 1.0
            rows.append(row)
            scores.append(float(value))
    return np.vstack(rows), np.asarray(scores, dtype=float)


def solve_ratings(
    event_key: str,
    matches: Sequence[MatchRecord],
    extractor: ScoreExtractor,
    *,
    metric: str = "opr",
    descending: bool = True,
) -> RatingResult:
    """Solve per-team contributions for the score ``extractor`` yields.

    Matches where either alliance yields ``None`` are skipped. Fewer than
    three usable matches or three distinct teams raises
    ``InsufficientMatchDataError``. Rank-deficient systems (teams that always
    share an alliance, teams with very few matches) get the minimum-norm
    least-squares solution and a warning.
    """

    usable = [
        match
        for match in matches
        if extractor(match, "red") is not None and extractor(match, "blue") is not None
    ]
    if len(usable) < MIN_MATCHES:
        raise InsufficientMatchDataError(
            f"Insufficient matches for {metric.upper()} calculation. "
            f"Need at least {MIN_MATCHES} valid matches, found {len(usable)}"
        )

    teams = _unique_teams(usable)
    if len(teams) < MIN_TEAMS:
        raise InsufficientMatchDataError(
            f"Insufficient teams for {metric.upper()} calculation. "
            f"Need at least {MIN_TEAMS} teams, found {len(teams)}"
        )

    design, scores = _build_system(usable, teams, extractor)
    if not np.all(np.isfinite(scores)):
        raise RatingCalculationError(f"Non-finite alliance scores in {metric} system for {event_key}")

    try:
        solution, _, rank, _ = np.linalg.lstsq(design, scores, rcond=None)
    except np.linalg.LinAlgError as exc:
        raise RatingCalculationError(f"{metric.upper()} solve failed for {event_key}: {exc}") from exc

    warnings: List[str] = []
    if rank < len(teams):
        warnings.append(
            f"{metric.upper()} system is rank-deficient (rank {rank} for {len(teams)} teams); "
            "used minimum-norm least squares. Results may be less accurate."
        )

    ratings = [
        TeamRating(
            team_number=team,
            value=round(float(solution[i]), 2),
            matches_played=_count_matches(usable, team),
        )
        for i, team in enumerate(teams)
    ]
    ratings.sort(key=lambda rating: rating.value, reverse=descending)

    return RatingResult(
        event_key=event_key,
        metric=metric,
        teams=ratings,
        total_matches=len(usable),
        calculated_at=datetime.now(timezone.utc),
        warnings=warnings,
    )


def calculate_opr(event_key: str, matches: Sequence[MatchRecord]) -> RatingResult:
    """Offensive Power Rating from each alliance's own final score."""

    return solve_ratings(event_key, matches, own_score, metric="opr")


def calculate_dpr(event_key: str, matches: Sequence[MatchRecord]) -> RatingResult:
    """Defensive Power Rating from the opposing alliance's score; lower is better."""

    return solve_ratings(event_key, matches, opponent_score, metric="dpr", descending=False)


def calculate_component_opr(
    event_key: str,
    matches: Sequence[MatchRecord],
    extractor: ScoreExtractor,
    *,
    metric: str = "component_opr",
) -> RatingResult:
    """OPR over an arbitrary sub-score pulled out by ``extractor``."""

    return solve_ratings(event_key, matches, extractor, metric=metric)


def calculate_ccwm(opr: RatingResult, dpr: RatingResult) -> List[CCWMRating]:
    """Join OPR and DPR by team; a team missing from either side counts it as 0."""

    if not opr.teams or not dpr.teams:
        raise RatingCalculationError("Cannot calculate CCWM without OPR and DPR results")

    dpr_by_team = {rating.team_number: rating for rating in dpr.teams}
    combined: List[CCWMRating] = []
    seen: set[int] = set()
    for rating in opr.teams:
        defensive = dpr_by_team.get(rating.team_number)
        if defensive is None:
            logger.warning("No DPR found for team %s, using 0", rating.team_number)
        dpr_value = defensive.value if defensive is not None else 0.0
        combined.append(
            CCWMRating(
                team_number=rating.team_number,
                opr=rating.value,
                dpr=dpr_value,
                ccwm=round(rating.value - dpr_value, 2),
                matches_played=rating.matches_played,
            )
        )
        seen.add(rating.team_number)

    for rating in dpr.teams:
        if rating.team_number in seen:
            continue
        logger.warning("Team %s has DPR but no OPR, adding with OPR=0", rating.team_number)
        combined.append(
            CCWMRating(
                team_number=rating.team_number,
                opr=0.0,
                dpr=rating.value,
                ccwm=round(-rating.value, 2),
                matches_played=rating.matches_played,
            )
        )

    combined.sort(key=lambda entry: entry.ccwm, reverse=True)
    return combined


def validate_rating_results(result: RatingResult) -> List[str]:
    """Sanity warnings: negative ratings, implausibly high ratings, thin samples."""

    warnings: List[str] = []
    label = result.metric.upper()

    negative = [rating for rating in result.teams if rating.value < 0]
    if negative:
        warnings.append(
            f"{len(negative)} teams have negative {label} values. "
            "This is unusual and may indicate data quality issues."
        )

    high = [rating for rating in result.teams if rating.value > HIGH_RATING_WARNING]
    if high:
        warnings.append(
            f"{len(high)} teams have {label} values over {HIGH_RATING_WARNING:g}. "
            "This is extremely high and should be verified."
        )

    thin = [rating for rating in result.teams if rating.matches_played < LOW_MATCH_WARNING]
    if thin:
        warnings.append(
            f"{len(thin)} teams have played fewer than {LOW_MATCH_WARNING} matches. "
            f"{label} values may be less reliable for these teams."
        )

    return warnings


__all__ = [
    "CCWMRating",
    "InsufficientMatchDataError",
    "RatingCalculationError",
    "RatingResult",
    "ScoreExtractor",
    "TeamRating",
    "calculate_ccwm",
    "calculate_component_opr",
    "calculate_dpr",
    "calculate_opr",
    "opponent_score",
    "own_score",
    "solve_ratings",
    "validate_rating_results",
]
