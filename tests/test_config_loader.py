import json

import pytest

from frcpick.config import WeightConfiguration
from frcpick.config_loader import WeightProfile


def test_profile_round_trips_through_json(tmp_path):
    path = tmp_path / "weights.json"
    profile = WeightProfile(
        weights=WeightConfiguration(opr=0.5, ccwm=0.3, reliability=0.2),
        name="Alliance captain",
        min_matches=4,
    )

    profile.save(path)
    loaded = WeightProfile.load(path)

    assert loaded == profile
    assert json.loads(path.read_text())["weights"]["opr"] == 0.5


def test_profile_accepts_flat_weights(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"opr": 1.0, "dpr": 0.5, "min_matches": "3"}))

    loaded = WeightProfile.load(path)

    assert loaded.weights == WeightConfiguration(opr=1.0, dpr=0.5)
    assert loaded.min_matches == 3
    assert loaded.name is None


def test_profile_rejects_unknown_metric(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text(json.dumps({"weights": {"opr": 1.0, "cycle_time": 0.2}}))

    with pytest.raises(ValueError):
        WeightProfile.load(path)
