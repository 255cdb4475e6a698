"""Canonical record models shared across ingest, ratings and ranking."""

from .match import Alliance, MatchRecord
from .team import RawTeamMetrics

__all__ = ["Alliance", "MatchRecord", "RawTeamMetrics"]
