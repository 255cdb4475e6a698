import pytest

from frcpick.config import WeightConfiguration, get_strategy
from frcpick.ranking import (
    NormalizedMetric,
    TeamNormalization,
    calculate_composite_score,
    extract_strengths,
    extract_weaknesses,
    validate_weights,
)


def _metric(value: float) -> NormalizedMetric:
    return NormalizedMetric(original=value, normalized=value, min=0.0, max=1.0, range=1.0)


def _normalized(default: float = 0.5, **overrides: float) -> TeamNormalization:
    names = (
        "opr",
        "dpr",
        "ccwm",
        "auto_score",
        "teleop_score",
        "endgame_score",
        "reliability",
        "driver_skill",
        "defense_rating",
        "speed_rating",
    )
    return TeamNormalization(
        team_number=1,
        **{name: _metric(overrides.get(name, default)) for name in names},
    )


def test_composite_score_is_weighted_mean():
    weights = WeightConfiguration(opr=2.0, dpr=2.0)
    score = calculate_composite_score(_normalized(opr=1.0, dpr=0.5), weights)
    assert score == pytest.approx(0.75)


def test_composite_score_is_scale_invariant():
    normalized = _normalized(opr=0.9, ccwm=0.3, reliability=0.6)
    base = get_strategy("BALANCED").weights
    scaled = WeightConfiguration(**{name: value * 10 for name, value in base.items()})
    assert calculate_composite_score(normalized, base) == pytest.approx(
        calculate_composite_score(normalized, scaled)
    )


def test_composite_score_zero_weights_is_zero():
    assert calculate_composite_score(_normalized(1.0), WeightConfiguration()) == 0.0


@pytest.mark.parametrize("value", [0.0, 0.25, 1.0])
def test_composite_score_bounded(value):
    for strategy_id in ("BALANCED", "OFFENSIVE", "DEFENSIVE", "RELIABLE"):
        score = calculate_composite_score(_normalized(value), get_strategy(strategy_id).weights)
        assert 0.0 <= score <= 1.0


def test_strengths_follow_fixed_priority_order():
    normalized = _normalized(0.5, speed_rating=0.8, opr=0.95, ccwm=0.7)
    assert extract_strengths(normalized) == [
        "High offensive output (OPR)",
        "Excellent net contribution (CCWM)",
        "Fast cycle times",
    ]


def test_reliability_uses_stricter_strength_threshold():
    assert "Extremely reliable robot" not in extract_strengths(_normalized(0.5, reliability=0.85))
    assert "Extremely reliable robot" in extract_strengths(_normalized(0.5, reliability=0.9))


def test_reliability_uses_laxer_weakness_threshold():
    weaknesses = extract_weaknesses(_normalized(0.5, reliability=0.7))
    assert weaknesses == ["Reliability concerns"]


def test_weaknesses_cover_low_metrics():
    weaknesses = extract_weaknesses(_normalized(0.0, reliability=1.0))
    assert weaknesses == [
        "Lower offensive output",
        "Defense needs improvement (high DPR)",
        "Low net contribution",
        "Inconsistent autonomous",
        "Unreliable endgame",
        "Driver skill could improve",
        "Slower cycle times",
    ]


def test_validate_weights_accepts_presets():
    result = validate_weights(get_strategy("OFFENSIVE").weights)
    assert result.valid
    assert result.warnings == []


def test_validate_weights_flags_negative_by_name():
    result = validate_weights(WeightConfiguration(opr=1.0, dpr=-0.2))
    assert not result.valid
    assert any("dpr" in warning for warning in result.warnings)


def test_validate_weights_flags_all_zero():
    result = validate_weights(WeightConfiguration())
    assert not result.valid
    assert result.warnings == ["All weights are zero - pick list will be meaningless"]


def test_validate_weights_flags_sum_outside_band():
    result = validate_weights(WeightConfiguration(opr=3.0))
    assert not result.valid
    assert "recommended range" in result.warnings[0]

    assert validate_weights(WeightConfiguration(opr=2.0)).valid
