"""CSV export for generated pick lists."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Optional, Sequence

from frcpick.ranking.picklist import PickListResult, PickListTeam


class PickListExportError(RuntimeError):
    """Raised when a pick list cannot be exported."""


EXPORT_HEADERS: tuple[str, ...] = (
    "Rank",
    "Team",
    "Team Name",
    "Nickname",
    "Score",
    "OPR",
    "DPR",
    "CCWM",
    "Matches",
    "Avg Auto",
    "Avg Teleop",
    "Avg Endgame",
    "Reliability %",
    "Driver Skill",
    "Defense",
    "Speed",
    "Strengths",
    "Weaknesses",
    "Picked",
)


def _fmt(value: Optional[float], digits: int) -> str:
    return "N/A" if value is None else f"{value:.{digits}f}"


def _team_row(team: PickListTeam) -> list[str]:
    return [
        str(team.rank),
        str(team.team_number),
        team.team_name or "",
        team.team_nickname or "",
        f"{team.composite_score:.4f}",
        f"{team.opr:.2f}",
        f"{team.dpr:.2f}",
        f"{team.ccwm:.2f}",
        str(team.matches_played),
        _fmt(team.avg_auto_score, 1),
        _fmt(team.avg_teleop_score, 1),
        _fmt(team.avg_endgame_score, 1),
        _fmt(team.reliability_score, 0),
        _fmt(team.avg_driver_skill, 1),
        _fmt(team.avg_defense_rating, 1),
        _fmt(team.avg_speed_rating, 1),
        "; ".join(team.strengths),
        "; ".join(team.weaknesses),
        "Yes" if team.picked else "No",
    ]


def export_pick_list_to_csv(
    result: PickListResult,
    *,
    include_picked: bool = True,
) -> str:
    """Serialize a pick list to CSV with ``#`` metadata lines above the header."""

    if any(team.rank < 1 for team in result.teams):
        raise PickListExportError(f"Pick list for {result.event_key} contains unranked teams")

    teams: Sequence[PickListTeam] = result.teams
    if not include_picked:
        teams = [team for team in teams if not team.picked]

    buffer = StringIO()
    buffer.write(f"# Pick List: {result.event_name or result.event_key}\n")
    buffer.write(f"# Strategy: {result.strategy.name}\n")
    buffer.write(f"# Generated: {result.generated_at.isoformat()}\n")
    buffer.write(f"# Total Teams: {result.total_teams}, Ranked: {len(result.teams)}\n")
    buffer.write("\n")

    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for team in teams:
        writer.writerow(_team_row(team))
    return buffer.getvalue()


def export_filename(result: PickListResult) -> str:
    date = result.generated_at.strftime("%Y-%m-%d")
    return f"picklist-{result.event_key}-{result.strategy.id.lower()}-{date}.csv"


__all__ = [
    "EXPORT_HEADERS",
    "PickListExportError",
    "export_filename",
    "export_pick_list_to_csv",
]
