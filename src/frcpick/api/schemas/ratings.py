from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field

from frcpick.models import MatchRecord


class RatingsRequest(BaseModel):
    event_key: str = Field(..., min_length=1)
    matches: List[MatchRecord]


class TeamRatingResponse(BaseModel):
    team_number: int
    opr: float
    dpr: float
    ccwm: float
    matches_played: int


class RatingsResponse(BaseModel):
    event_key: str
    total_matches: int
    teams: List[TeamRatingResponse]
    warnings: List[str] = Field(default_factory=list)


class ComponentRatingsResponse(BaseModel):
    event_key: str
    components: Dict[str, Dict[int, float]]
    failures: Dict[str, str] = Field(default_factory=dict)
