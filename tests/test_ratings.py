from datetime import datetime, timezone
from itertools import combinations

import pytest

from frcpick.models import MatchRecord
from frcpick.ratings import (
    InsufficientMatchDataError,
    RatingCalculationError,
    RatingResult,
    TeamRating,
    calculate_ccwm,
    calculate_dpr,
    calculate_event_ratings,
    calculate_opr,
    validate_rating_results,
)


NOW = datetime(2025, 3, 1, tzinfo=timezone.utc)
CONTRIBUTIONS = {1: 10.0, 2: 20.0, 3: 30.0, 4: 40.0, 5: 50.0, 6: 60.0}


def _split_matches() -> list[MatchRecord]:
    """Every way to split six teams into two alliances, one match each."""

    teams = sorted(CONTRIBUTIONS)
    matches = []
    for number, red in enumerate((triple for triple in combinations(teams, 3) if 1 in triple), start=1):
        blue = [team for team in teams if team not in red]
        matches.append(
            MatchRecord(
                match_key=f"2025test_qm{number}",
                event_key="2025test",
                match_number=number,
                red_teams=list(red),
                blue_teams=blue,
                red_score=sum(CONTRIBUTIONS[team] for team in red),
                blue_score=sum(CONTRIBUTIONS[team] for team in blue),
            )
        )
    return matches


def _fixed_alliance_matches(count: int) -> list[MatchRecord]:
    return [
        MatchRecord(
            match_key=f"2025test_qm{number}",
            red_teams=[1, 2, 3],
            blue_teams=[4, 5, 6],
            red_score=60 + number,
            blue_score=50 + number,
        )
        for number in range(1, count + 1)
    ]


def test_opr_recovers_exact_contributions():
    result = calculate_opr("2025test", _split_matches())

    assert result.metric == "opr"
    assert result.total_matches == 10
    assert result.warnings == []
    assert [rating.team_number for rating in result.teams] == [6, 5, 4, 3, 2, 1]
    for rating in result.teams:
        assert rating.value == pytest.approx(CONTRIBUTIONS[rating.team_number])
        assert rating.matches_played == 10


def test_dpr_is_sorted_best_first():
    result = calculate_dpr("2025test", _split_matches())

    # Opponents always score 210 minus the alliance's own contribution.
    assert [rating.team_number for rating in result.teams] == [6, 5, 4, 3, 2, 1]
    for rating in result.teams:
        assert rating.value == pytest.approx(70.0 - CONTRIBUTIONS[rating.team_number])


def test_ccwm_is_opr_minus_dpr():
    matches = _split_matches()
    combined = calculate_ccwm(calculate_opr("2025test", matches), calculate_dpr("2025test", matches))

    assert [entry.team_number for entry in combined] == [6, 5, 4, 3, 2, 1]
    for entry in combined:
        assert entry.ccwm == pytest.approx(2 * CONTRIBUTIONS[entry.team_number] - 70.0)
        assert entry.ccwm == pytest.approx(entry.opr - entry.dpr)


def test_ccwm_treats_missing_side_as_zero():
    opr = RatingResult("2025test", "opr", [TeamRating(1, 30.0, 5)], 5, calculated_at=NOW)
    dpr = RatingResult("2025test", "dpr", [TeamRating(2, 12.5, 5)], 5, calculated_at=NOW)

    combined = {entry.team_number: entry for entry in calculate_ccwm(opr, dpr)}

    assert combined[1].dpr == 0.0
    assert combined[1].ccwm == pytest.approx(30.0)
    assert combined[2].opr == 0.0
    assert combined[2].ccwm == pytest.approx(-12.5)


def test_ccwm_requires_both_results():
    empty = RatingResult("2025test", "dpr", [], 0, calculated_at=NOW)
    opr = calculate_opr("2025test", _split_matches())
    with pytest.raises(RatingCalculationError):
        calculate_ccwm(opr, empty)


def test_too_few_matches_raises():
    with pytest.raises(InsufficientMatchDataError):
        calculate_opr("2025test", _fixed_alliance_matches(2))


def test_unplayed_matches_do_not_count():
    matches = _fixed_alliance_matches(2) + [
        MatchRecord(match_key="2025test_qm9", red_teams=[1, 2, 3], blue_teams=[4, 5, 6])
    ]
    with pytest.raises(InsufficientMatchDataError):
        calculate_opr("2025test", matches)


def test_too_few_teams_raises():
    matches = [
        MatchRecord(match_key=f"m{n}", red_teams=[1], blue_teams=[2], red_score=10, blue_score=5)
        for n in range(5)
    ]
    with pytest.raises(InsufficientMatchDataError):
        calculate_opr("2025test", matches)


def test_rank_deficient_system_warns_and_still_solves():
    result = calculate_opr("2025test", _fixed_alliance_matches(4))

    assert len(result.teams) == 6
    assert any("rank-deficient" in warning for warning in result.warnings)
    # Teams that always share an alliance split the score evenly.
    red = {rating.team_number: rating.value for rating in result.teams if rating.team_number <= 3}
    assert red[1] == pytest.approx(red[2])
    assert red[2] == pytest.approx(red[3])
    assert sum(red.values()) == pytest.approx(62.5, abs=0.05)


def test_validate_rating_results_flags_outliers():
    result = RatingResult(
        event_key="2025test",
        metric="opr",
        teams=[
            TeamRating(1, -4.0, 6),
            TeamRating(2, 250.0, 6),
            TeamRating(3, 30.0, 2),
            TeamRating(4, 25.0, 8),
        ],
        total_matches=8,
        calculated_at=NOW,
    )

    warnings = validate_rating_results(result)

    assert len(warnings) == 3
    assert warnings[0].startswith("1 teams have negative OPR values")
    assert "over 200" in warnings[1]
    assert "fewer than 3 matches" in warnings[2]


def test_event_ratings_ignore_incomplete_matches():
    matches = _split_matches() + [
        MatchRecord(match_key="2025test_qm99", red_teams=[1, 2, 3], blue_teams=[4, 5, 6])
    ]

    ratings = calculate_event_ratings("2025test", matches)

    assert ratings.opr.total_matches == 10
    assert ratings.dpr.total_matches == 10
    assert ratings.warnings == []
