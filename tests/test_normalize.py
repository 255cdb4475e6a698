import random

import pytest

from frcpick.models import RawTeamMetrics
from frcpick.ranking import normalize_all_metrics, normalize_metric


def _team(number: int, **overrides) -> RawTeamMetrics:
    data = {"team_number": number, "matches_played": 10, "opr": 50.0, "dpr": 20.0, "ccwm": 30.0}
    data.update(overrides)
    return RawTeamMetrics(**data)


def test_normalize_metric_scales_linearly():
    result = normalize_metric(50, 0, 100)

    assert result.original == 50
    assert result.normalized == 0.5
    assert (result.min, result.max, result.range) == (0, 100, 100)


def test_normalize_metric_inverts():
    assert normalize_metric(25, 0, 100, invert=True).normalized == 0.75


def test_normalize_metric_zero_range_is_midpoint():
    result = normalize_metric(50, 50, 50)
    assert result.normalized == 0.5
    assert result.range == 0


def test_normalize_metric_clamps_out_of_range_values():
    assert normalize_metric(150, 0, 100).normalized == 1.0
    assert normalize_metric(-20, 0, 100).normalized == 0.0


def test_normalize_metric_rounds_to_four_places():
    assert normalize_metric(1, 0, 3).normalized == 0.3333


def test_normalized_values_stay_in_unit_interval():
    rng = random.Random(7)
    for _ in range(500):
        low = rng.uniform(-100, 100)
        high = low + rng.uniform(0, 200)
        value = rng.uniform(-300, 300)
        for invert in (False, True):
            assert 0.0 <= normalize_metric(value, low, high, invert).normalized <= 1.0


def test_inversion_complements_plain_scaling():
    rng = random.Random(11)
    for _ in range(200):
        low = rng.uniform(-50, 50)
        high = low + rng.uniform(0.1, 100)
        value = rng.uniform(low, high)
        plain = normalize_metric(value, low, high).normalized
        inverted = normalize_metric(value, low, high, invert=True).normalized
        assert inverted == pytest.approx(1 - plain, abs=1e-4)


def test_normalize_all_uses_pool_range_and_inverts_dpr():
    teams = [_team(1, opr=50.0, dpr=20.0), _team(2, opr=40.0, dpr=10.0)]

    normalized = normalize_all_metrics(teams)

    assert normalized[1].opr.normalized == 1.0
    assert normalized[2].opr.normalized == 0.0
    assert normalized[1].dpr.normalized == 0.0
    assert normalized[2].dpr.normalized == 1.0
    assert normalized[1].opr.min == 40.0
    assert normalized[1].opr.max == 50.0


def test_identical_pool_values_normalize_to_midpoint():
    teams = [_team(n, ccwm=30.0) for n in (1, 2, 3)]

    normalized = normalize_all_metrics(teams)

    assert all(entry.ccwm.normalized == 0.5 for entry in normalized.values())


def test_missing_optional_metrics_use_neutral_defaults():
    teams = [
        _team(1, reliability_score=80.0, avg_driver_skill=5.0),
        _team(2),
    ]

    normalized = normalize_all_metrics(teams)

    # Team 2 has no reliability reading and is treated as 100%.
    assert normalized[2].reliability.original == 100.0
    assert normalized[2].reliability.normalized == 1.0
    assert normalized[1].reliability.normalized == 0.0
    # Missing driver skill defaults to 3 on the 1-5 scale.
    assert normalized[2].driver_skill.original == 3.0
    assert normalized[2].auto_score.original == 0.0


def test_normalize_all_empty_pool():
    assert normalize_all_metrics([]) == {}
