"""Load match results (flat or TBA-style JSON) into ``MatchRecord`` models."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from frcpick.models import MatchRecord


logger = logging.getLogger(__name__)


def _team_number(value: Any) -> int:
    if isinstance(value, int):
        return value
    digits = re.sub(r"[^0-9]", "", str(value))
    if not digits:
        raise ValueError(f"team key {value!r} has no digits")
    return int(digits)


def _score(value: Any) -> float | None:
    # TBA reports unplayed matches with a score of -1.
    if value is None:
        return None
    score = float(value)
    return None if score < 0 else score


def match_from_dict(data: Mapping[str, Any]) -> MatchRecord:
    """Build a match from either the flat layout or a TBA ``alliances`` block."""

    alliances = data.get("alliances")
    if isinstance(alliances, Mapping):
        red = alliances.get("red") or {}
        blue = alliances.get("blue") or {}
        payload = {
            "match_key": data.get("match_key") or data.get("key") or "",
            "event_key": data.get("event_key", ""),
            "comp_level": data.get("comp_level", "qm"),
            "match_number": int(data.get("match_number") or 0),
            "red_teams": [_team_number(team) for team in red.get("team_keys", [])],
            "blue_teams": [_team_number(team) for team in blue.get("team_keys", [])],
            "red_score": _score(red.get("score")),
            "blue_score": _score(blue.get("score")),
            "score_breakdown": data.get("score_breakdown"),
        }
    else:
        payload = {
            "match_key": data.get("match_key") or data.get("key") or "",
            "event_key": data.get("event_key", ""),
            "comp_level": data.get("comp_level", "qm"),
            "match_number": int(data.get("match_number") or 0),
            "red_teams": [_team_number(team) for team in data.get("red_teams", [])],
            "blue_teams": [_team_number(team) for team in data.get("blue_teams", [])],
            "red_score": _score(data.get("red_score")),
            "blue_score": _score(data.get("blue_score")),
            "score_breakdown": data.get("score_breakdown"),
        }
    return MatchRecord(**payload)


def matches_from_dicts(rows: Iterable[Mapping[str, Any]]) -> List[MatchRecord]:
    matches: List[MatchRecord] = []
    for row in rows:
        try:
            matches.append(match_from_dict(row))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Skipping match %s: %s", row.get("match_key") or row.get("key"), exc)
    return matches


def load_matches_json(path: Path) -> List[MatchRecord]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, Mapping):
        data = data.get("matches", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of matches")
    return matches_from_dicts(data)


__all__ = ["load_matches_json", "match_from_dict", "matches_from_dicts"]
