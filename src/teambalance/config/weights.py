"""Scoring weight presets for base and extended composite scores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Tuple, Union

from teambalance.models.player import BASE_ATTRIBUTES


@dataclass(frozen=True)
class ScoringWeights:
    engagement: float = 0.4
    activity: float = 0.3
    points: float = 0.2
    streak: float = 0.1

    def as_mapping(self) -> Dict[str, float]:
        """Weights keyed by the player attribute they apply to."""

        return dict(zip(BASE_ATTRIBUTES, (self.engagement, self.activity, self.points, self.streak)))

    @property
    def total(self) -> float:
        return self.engagement + self.activity + self.points + self.streak


@dataclass(frozen=True)
class FeatureGroup:
    """A weighted group of secondary features with per-feature sub-weights."""

    name: str
    weight: float
    sub_weights: Mapping[str, float]

    @property
    def features(self) -> Tuple[str, ...]:
        return tuple(self.sub_weights)


@dataclass(frozen=True)
class ExtendedWeights:
    primary: ScoringWeights
    groups: Tuple[FeatureGroup, ...] = field(default_factory=tuple)

    @property
    def features(self) -> Tuple[str, ...]:
        names: list[str] = []
        for group in self.groups:
            names.extend(name for name in group.features if name not in names)
        return tuple(names)

    @property
    def total(self) -> float:
        return self.primary.total + sum(group.weight for group in self.groups)


Weights = Union[ScoringWeights, ExtendedWeights]

DEFAULT_WEIGHTS = ScoringWeights()

DEFAULT_FEATURE_GROUPS: Tuple[FeatureGroup, ...] = (
    FeatureGroup(
        name="event_quality",
        weight=0.20,
        sub_weights={
            "event_variety_score": 0.3,
            "high_value_events_ratio": 0.3,
            "engagement_consistency": 0.2,
            "recent_event_activity": 0.2,
        },
    ),
    FeatureGroup(
        name="communication",
        weight=0.10,
        sub_weights={
            "message_engagement_ratio": 0.3,
            "conversation_participation": 0.3,
            "message_length_avg": 0.2,
            "reply_engagement_rate": 0.2,
        },
    ),
    FeatureGroup(
        name="spending_behavior",
        weight=0.05,
        sub_weights={
            "spending_efficiency": 0.4,
            "consumable_usage_rate": 0.2,
            "spending_frequency": 0.2,
            "investment_vs_consumption": 0.2,
        },
    ),
)

# Base weights shrink to make room for the secondary groups; totals stay at 1.0.
DEFAULT_EXTENDED_WEIGHTS = ExtendedWeights(
    primary=ScoringWeights(engagement=0.25, activity=0.20, points=0.15, streak=0.05),
    groups=DEFAULT_FEATURE_GROUPS,
)

_PRESETS: Dict[str, Weights] = {
    "standard": DEFAULT_WEIGHTS,
    "extended": DEFAULT_EXTENDED_WEIGHTS,
    "activity": ScoringWeights(engagement=0.25, activity=0.45, points=0.1, streak=0.2),
}


def iter_presets() -> Iterable[Tuple[str, Weights]]:
    """Return an iterator of all configured weight presets."""

    return _PRESETS.items()


def get_weights(name: str) -> Weights:
    """Fetch a preset by name, raising KeyError if missing."""

    key = name.strip().lower()
    if key not in _PRESETS:
        raise KeyError(f"No weight preset configured for name={name!r}")
    return _PRESETS[key]


def get_weights_by_key(key: Union[str, Weights, None]) -> Weights:
    """Resolve a preset name or pass through an explicit weights object."""

    if key is None:
        return DEFAULT_WEIGHTS
    if isinstance(key, (ScoringWeights, ExtendedWeights)):
        return key
    if not isinstance(key, str):
        raise TypeError("key must be a preset name or a weights object")
    return get_weights(key)
