"""Per-team performance aggregates consumed by the pick-list engine."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class RawTeamMetrics(BaseModel):
    """One team's aggregates for a single event."""

    team_number: int = Field(..., ge=1)
    team_name: Optional[str] = None
    team_nickname: Optional[str] = None
    matches_played: int = Field(default=0, ge=0)
    opr: float
    dpr: float
    ccwm: float
    avg_total_score: float | None = None
    avg_auto_score: float | None = None
    avg_teleop_score: float | None = None
    avg_endgame_score: float | None = None
    reliability_score: float | None = Field(default=None, ge=0.0, le=100.0)
    avg_defense_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    avg_driver_skill: float | None = Field(default=None, ge=0.0, le=5.0)
    avg_speed_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    notes: Optional[str] = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)
