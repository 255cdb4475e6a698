import json
from itertools import combinations

from frcpick.cli import main


def _write_matches(path):
    contributions = {1: 10, 2: 20, 3: 30, 4: 40, 5: 50, 6: 60}
    matches = []
    for number, red in enumerate((t for t in combinations(contributions, 3) if 1 in t), start=1):
        blue = [team for team in contributions if team not in red]
        matches.append(
            {
                "match_key": f"2025test_qm{number}",
                "red_teams": list(red),
                "blue_teams": blue,
                "red_score": sum(contributions[team] for team in red),
                "blue_score": sum(contributions[team] for team in blue),
            }
        )
    path.write_text(json.dumps(matches), encoding="utf-8")


def test_rank_from_team_csv(tmp_path, capsys):
    teams = tmp_path / "teams.csv"
    teams.write_text(
        "Team,matches_played,opr,dpr,ccwm\n254,10,50,20,30\n1678,10,40,10,30\n971,2,45,15,30\n",
        encoding="utf-8",
    )
    output = tmp_path / "picklist.csv"
    saved = tmp_path / "weights.json"

    main(
        [
            "rank",
            "--teams",
            str(teams),
            "--event",
            "2025test",
            "--column",
            "team_number=Team",
            "--save-weights",
            str(saved),
            "--output",
            str(output),
        ]
    )

    out = capsys.readouterr().out
    assert "Loaded 3/3 team rows" in out
    assert "Ranked 2 of 3 teams" in out
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[1] == "# Strategy: Balanced"
    assert lines[6].startswith("1,254,")
    assert json.loads(saved.read_text())["weights"]["ccwm"] == 0.25


def test_rank_with_weight_profile(tmp_path):
    teams = tmp_path / "teams.csv"
    teams.write_text("team_number,matches_played,opr,dpr,ccwm\n254,3,50,20,30\n1678,3,40,10,30\n", encoding="utf-8")
    profile = tmp_path / "weights.json"
    profile.write_text(json.dumps({"name": "Defense", "min_matches": 3, "weights": {"dpr": 1.0}}))
    output = tmp_path / "picklist.csv"

    main(["rank", "--teams", str(teams), "--event", "2025test", "--weights-file", str(profile), "--output", str(output)])

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[1] == "# Strategy: Custom Strategy"
    assert lines[6].startswith("1,1678,")


def test_rank_from_matches(tmp_path, capsys):
    matches = tmp_path / "matches.json"
    _write_matches(matches)
    output = tmp_path / "picklist.csv"

    main(["rank", "--matches", str(matches), "--event", "2025test", "--strategy", "OFFENSIVE", "--output", str(output)])

    assert "Computed ratings for 6 teams" in capsys.readouterr().out
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[6].startswith("1,6,")


def test_ratings_command_writes_json(tmp_path):
    matches = tmp_path / "matches.json"
    _write_matches(matches)
    output = tmp_path / "ratings.json"

    main(["ratings", str(matches), "--event", "2025test", "--output", str(output)])

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["total_matches"] == 10
    assert payload["teams"][0]["team_number"] == 6
    assert set(payload["component_failures"]) == {"auto", "teleop_hub", "endgame", "total_hub"}


def test_strategies_command(capsys):
    main(["strategies"])
    out = capsys.readouterr().out
    assert "BALANCED" in out
    assert "RELIABLE" in out
