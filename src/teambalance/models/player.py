"""Canonical player models shared across ingestion, scoring and assignment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


# Attributes that feed the base composite score, in weight order.
BASE_ATTRIBUTES = (
    "historical_event_engagements",
    "days_active_last_30",
    "current_total_points",
    "current_streak_value",
)

# Secondary attributes derived outside this package and supplied as plain columns.
SECONDARY_FEATURES = (
    "event_variety_score",
    "high_value_events_ratio",
    "engagement_consistency",
    "recent_event_activity",
    "message_engagement_ratio",
    "conversation_participation",
    "message_length_avg",
    "reply_engagement_rate",
    "spending_efficiency",
    "consumable_usage_rate",
    "spending_frequency",
    "investment_vs_consumption",
)


class PlayerRecord(BaseModel):
    """Validated player payload consumed by the scoring pipeline."""

    player_id: int = Field(..., ge=1)
    historical_events_participated: float = 0.0
    historical_event_engagements: float = 0.0
    historical_points_earned: float = 0.0
    historical_points_spent: float = 0.0
    historical_messages_sent: float = 0.0
    current_total_points: float = 0.0
    days_active_last_30: float = 0.0
    current_streak_value: float = 0.0
    last_active_ts: str = ""
    current_team_id: int = 0
    current_team_name: str = ""
    features: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @property
    def has_features(self) -> bool:
        return bool(self.features)


@dataclass(frozen=True)
class ScoredPlayer:
    """A player with its batch-relative composite score.

    ``primary_score`` and ``secondary_score`` are only set by extended scoring,
    where ``composite_score`` is exactly their sum.
    """

    player: PlayerRecord
    composite_score: float
    primary_score: Optional[float] = None
    secondary_score: Optional[float] = None

    @property
    def player_id(self) -> int:
        return self.player.player_id
