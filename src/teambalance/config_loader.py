"""Persist and load CLI weight profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from teambalance.config import ExtendedWeights, FeatureGroup, ScoringWeights, Weights


@dataclass
class WeightsProfile:
    base_weights: Dict[str, float] = field(default_factory=dict)
    feature_groups: Dict[str, Dict[str, object]] = field(default_factory=dict)
    robust: bool = False
    max_iterations: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "WeightsProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            base_weights=data.get("base_weights", {}),
            feature_groups=data.get("feature_groups", {}),
            robust=bool(data.get("robust", False)),
            max_iterations=data.get("max_iterations"),
        )

    @classmethod
    def from_weights(cls, weights: Weights, *, robust: bool = False, max_iterations: Optional[int] = None) -> "WeightsProfile":
        primary = weights.primary if isinstance(weights, ExtendedWeights) else weights
        groups = weights.groups if isinstance(weights, ExtendedWeights) else ()
        return cls(
            base_weights={
                "engagement": primary.engagement,
                "activity": primary.activity,
                "points": primary.points,
                "streak": primary.streak,
            },
            feature_groups={
                group.name: {"weight": group.weight, "sub_weights": dict(group.sub_weights)} for group in groups
            },
            robust=robust,
            max_iterations=max_iterations,
        )

    def save(self, path: Path) -> None:
        payload = {
            "base_weights": self.base_weights,
            "feature_groups": self.feature_groups,
            "robust": self.robust,
            "max_iterations": self.max_iterations,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def to_weights(self) -> Weights:
        """Build scoring weights; any feature group makes them extended."""

        primary = ScoringWeights(**{key: float(value) for key, value in self.base_weights.items()})
        if not self.feature_groups:
            return primary
        groups = tuple(
            FeatureGroup(
                name=name,
                weight=float(group["weight"]),
                sub_weights={feature: float(value) for feature, value in dict(group["sub_weights"]).items()},
            )
            for name, group in self.feature_groups.items()
        )
        return ExtendedWeights(primary=primary, groups=groups)
