from __future__ import annotations

from pydantic import BaseModel, Field


class MetricRangeResponse(BaseModel):
    min: float
    max: float
    avg: float


class PlayersPreviewResponse(BaseModel):
    total_players: int
    engagement_range: MetricRangeResponse
    activity_range: MetricRangeResponse
    points_range: MetricRangeResponse
    current_teams: list[int] = Field(default_factory=list)
    players_with_features: int = 0
    duplicate_player_ids: list[int] = Field(default_factory=list)
