"""Load per-team statistics exports into ``RawTeamMetrics`` records."""

from __future__ import annotations

import csv
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ValidationError

from frcpick.models import RawTeamMetrics


logger = logging.getLogger(__name__)

DEFAULT_TEAM_MAPPING: dict[str, str] = {
    "team_number": "team_number",
    "team_name": "team_name",
    "team_nickname": "team_nickname",
    "matches_played": "matches_played",
    "opr": "opr",
    "dpr": "dpr",
    "ccwm": "ccwm",
    "avg_total_score": "avg_total_score",
    "avg_auto_score": "avg_auto_score",
    "avg_teleop_score": "avg_teleop_score",
    "avg_endgame_score": "avg_endgame_score",
    "reliability_score": "reliability_score",
    "avg_defense_rating": "avg_defense_rating",
    "avg_driver_skill": "avg_driver_skill",
    "avg_speed_rating": "avg_speed_rating",
    "notes": "notes",
}

_MISSING_TOKENS = {"", "n/a", "na", "none", "null", "-"}


class TeamStatsRow(BaseModel):
    """A raw CSV row with the mapped columns pulled out as text."""

    values: dict[str, Optional[str]]

    @classmethod
    def from_mapping(cls, row: Mapping[str, str], mapping: Mapping[str, str]) -> "TeamStatsRow":
        values: dict[str, Optional[str]] = {}
        for key, column in mapping.items():
            raw = row.get(column)
            values[key] = raw.strip() if raw is not None else None
        return cls(values=values)


@dataclass
class TeamLoadReport:
    total_rows: int = 0
    loaded: int = 0
    skipped_rows: List[str] = field(default_factory=list)


def _parse_team_number(raw: Optional[str]) -> int:
    digits = re.sub(r"[^0-9]", "", raw or "")
    if not digits:
        raise ValueError(f"team number {raw!r} has no digits")
    return int(digits)


def _parse_optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip().lower() in _MISSING_TOKENS:
        return None
    text = raw.strip().rstrip("%")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"value {raw!r} is not numeric") from None
    if not math.isfinite(value):
        raise ValueError(f"value {raw!r} is not finite")
    return value


def _parse_required_float(raw: Optional[str], name: str) -> float:
    value = _parse_optional_float(raw)
    if value is None:
        raise ValueError(f"{name} is required")
    return value


def _parse_text(raw: Optional[str]) -> Optional[str]:
    if raw is None or not raw.strip():
        return None
    return raw.strip()


_OPTIONAL_NUMERIC = (
    "avg_total_score",
    "avg_auto_score",
    "avg_teleop_score",
    "avg_endgame_score",
    "reliability_score",
    "avg_defense_rating",
    "avg_driver_skill",
    "avg_speed_rating",
)


def row_to_record(row: TeamStatsRow) -> RawTeamMetrics:
    values = row.values
    matches = _parse_optional_float(values.get("matches_played"))
    payload: dict[str, object] = {
        "team_number": _parse_team_number(values.get("team_number")),
        "team_name": _parse_text(values.get("team_name")),
        "team_nickname": _parse_text(values.get("team_nickname")),
        "matches_played": int(matches) if matches is not None else 0,
        "opr": _parse_required_float(values.get("opr"), "opr"),
        "dpr": _parse_required_float(values.get("dpr"), "dpr"),
        "ccwm": _parse_required_float(values.get("ccwm"), "ccwm"),
        "notes": _parse_text(values.get("notes")),
    }
    for key in _OPTIONAL_NUMERIC:
        payload[key] = _parse_optional_float(values.get(key))
    return RawTeamMetrics(**payload)


def rows_to_records(rows: Iterable[TeamStatsRow]) -> Tuple[List[RawTeamMetrics], TeamLoadReport]:
    """Convert rows, skipping (and reporting) the ones that fail to parse."""

    report = TeamLoadReport()
    records: List[RawTeamMetrics] = []
    seen: set[int] = set()
    for index, row in enumerate(rows, start=1):
        report.total_rows += 1
        try:
            record = row_to_record(row)
        except (ValueError, ValidationError) as exc:
            logger.warning("Skipping team row %d: %s", index, exc)
            report.skipped_rows.append(f"row {index}: {exc}")
            continue
        if record.team_number in seen:
            report.skipped_rows.append(f"row {index}: duplicate team {record.team_number}")
            continue
        seen.add(record.team_number)
        records.append(record)
    report.loaded = len(records)
    return records, report


def load_team_metrics_csv(
    path: Path,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[RawTeamMetrics], TeamLoadReport]:
    column_mapping = {**DEFAULT_TEAM_MAPPING, **(mapping or {})}
    with path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        rows = [TeamStatsRow.from_mapping(row, column_mapping) for row in reader]
    return rows_to_records(rows)


def parse_team_metrics_text(
    text: str,
    *,
    mapping: Mapping[str, str] | None = None,
) -> Tuple[List[RawTeamMetrics], TeamLoadReport]:
    column_mapping = {**DEFAULT_TEAM_MAPPING, **(mapping or {})}
    reader = csv.DictReader(text.splitlines())
    rows = [TeamStatsRow.from_mapping(row, column_mapping) for row in reader]
    return rows_to_records(rows)


__all__ = [
    "DEFAULT_TEAM_MAPPING",
    "TeamLoadReport",
    "TeamStatsRow",
    "load_team_metrics_csv",
    "parse_team_metrics_text",
    "row_to_record",
    "rows_to_records",
]
