"""Match records with alliance rosters and scores."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


Alliance = Literal["red", "blue"]


class MatchRecord(BaseModel):
    """A played (or scheduled) match between two three-team alliances."""

    match_key: str = Field(..., min_length=1)
    event_key: str = ""
    comp_level: str = "qm"
    match_number: int = 0
    red_teams: List[int] = Field(default_factory=list, max_length=3)
    blue_teams: List[int] = Field(default_factory=list, max_length=3)
    red_score: Optional[float] = None
    blue_score: Optional[float] = None
    score_breakdown: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    @field_validator("red_teams", "blue_teams")
    @classmethod
    def _drop_empty_slots(cls, value: List[int]) -> List[int]:
        # Unfilled stations arrive as 0 from schedule exports.
        return [team for team in value if team]

    @property
    def is_complete(self) -> bool:
        return self.red_score is not None and self.blue_score is not None

    def teams(self, alliance: Alliance) -> List[int]:
        return list(self.red_teams if alliance == "red" else self.blue_teams)

    def score(self, alliance: Alliance) -> Optional[float]:
        return self.red_score if alliance == "red" else self.blue_score

    def alliance_breakdown(self, alliance: Alliance) -> Optional[Dict[str, Any]]:
        """Return the alliance's score breakdown, or None if it is missing or malformed."""

        if not self.score_breakdown:
            return None
        raw = self.score_breakdown.get(alliance)
        if not isinstance(raw, dict):
            return None
        if not isinstance(raw.get("hubScore"), dict):
            return None
        return raw

    def has_team(self, team_number: int) -> bool:
        return team_number in self.red_teams or team_number in self.blue_teams
