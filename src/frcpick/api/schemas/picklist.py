from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from frcpick.models import RawTeamMetrics


class WeightsPayload(BaseModel):
    opr: float = 0.0
    dpr: float = 0.0
    ccwm: float = 0.0
    auto_score: float = 0.0
    teleop_score: float = 0.0
    endgame_score: float = 0.0
    reliability: float = 0.0
    driver_skill: float = 0.0
    defense_rating: float = 0.0
    speed_rating: float = 0.0

    model_config = ConfigDict(extra="forbid")


class StrategyResponse(BaseModel):
    id: str
    name: str
    description: str
    weights: WeightsPayload


class ScoutingNoteEntry(BaseModel):
    team_number: int = Field(..., ge=1)
    strengths: str | None = None
    weaknesses: str | None = None
    notes: str | None = None


class PickListRequest(BaseModel):
    event_key: str = Field(..., min_length=1)
    event_name: str | None = None
    teams: List[RawTeamMetrics]
    strategy: str | None = None
    weights: WeightsPayload | None = None
    min_matches: int | None = Field(default=None, ge=0)
    scouting_notes: List[ScoutingNoteEntry] | None = None


class PickListTeamResponse(BaseModel):
    rank: int
    team_number: int
    team_name: str | None = None
    team_nickname: str | None = None
    matches_played: int
    opr: float
    dpr: float
    ccwm: float
    composite_score: float
    avg_total_score: float | None = None
    avg_auto_score: float | None = None
    avg_teleop_score: float | None = None
    avg_endgame_score: float | None = None
    reliability_score: float | None = None
    avg_defense_rating: float | None = None
    avg_driver_skill: float | None = None
    avg_speed_rating: float | None = None
    strengths: List[str]
    weaknesses: List[str]
    picked: bool
    notes: str | None = None


class PickListMetadataResponse(BaseModel):
    avg_composite_score: float
    median_composite_score: float
    std_dev_composite_score: float
    avg_opr: float
    avg_dpr: float
    avg_ccwm: float
    teams_filtered: int
    warnings: List[str]


class PickListResponse(BaseModel):
    event_key: str
    event_name: str | None = None
    strategy: StrategyResponse
    generated_at: datetime
    total_teams: int
    min_matches_filter: int
    metadata: PickListMetadataResponse
    teams: List[PickListTeamResponse]


class MarkPickedRequest(BaseModel):
    pick_list: PickListResponse
    team_number: int
    picked: bool = True
