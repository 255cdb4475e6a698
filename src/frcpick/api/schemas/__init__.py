"""Pydantic models for API I/O."""

from .picklist import (
    MarkPickedRequest,
    PickListMetadataResponse,
    PickListRequest,
    PickListResponse,
    PickListTeamResponse,
    ScoutingNoteEntry,
    StrategyResponse,
    WeightsPayload,
)
from .ratings import ComponentRatingsResponse, RatingsRequest, RatingsResponse, TeamRatingResponse

__all__ = [
    "ComponentRatingsResponse",
    "MarkPickedRequest",
    "PickListMetadataResponse",
    "PickListRequest",
    "PickListResponse",
    "PickListTeamResponse",
    "RatingsRequest",
    "RatingsResponse",
    "ScoutingNoteEntry",
    "StrategyResponse",
    "TeamRatingResponse",
    "WeightsPayload",
]
