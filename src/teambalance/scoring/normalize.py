"""Batch-relative min/max normalization of player attributes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence

from teambalance.models import PlayerRecord


# Cumulative counters with heavy right tails; robust mode compresses only these.
ROBUST_ATTRIBUTES = ("historical_event_engagements", "current_total_points")

NEUTRAL_VALUE = 0.5


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    @property
    def is_flat(self) -> bool:
        return self.max == self.min


def attribute_value(player: PlayerRecord, attribute: str) -> float:
    """Read a model field, falling back to the secondary ``features`` mapping."""

    if attribute in PlayerRecord.model_fields and attribute != "features":
        return float(getattr(player, attribute))
    return float(player.features.get(attribute, 0.0))


def compress(value: float) -> float:
    """Log-compress a non-negative value; preserves rank order."""

    return math.log1p(value)


def attribute_range(values: Iterable[float]) -> ValueRange:
    materialized = list(values)
    if not materialized:
        raise ValueError("attribute_range() requires at least one value")
    return ValueRange(min=min(materialized), max=max(materialized))


def normalize_value(value: float, value_range: ValueRange) -> float:
    if value_range.is_flat:
        return NEUTRAL_VALUE
    return (value - value_range.min) / (value_range.max - value_range.min)


def normalize_attributes(
    players: Sequence[PlayerRecord],
    attributes: Sequence[str],
    *,
    robust: bool = False,
    robust_attributes: Sequence[str] = ROBUST_ATTRIBUTES,
) -> List[Dict[str, float]]:
    """Scale each attribute to [0, 1] relative to this batch.

    Returns one mapping per player, in input order. With ``robust`` set the
    attributes listed in ``robust_attributes`` are passed through
    :func:`compress` before scaling. Negative raw values are not clamped.
    """

    if not players:
        return []

    compressed = set(robust_attributes) if robust else set()
    columns: Dict[str, List[float]] = {}
    for attribute in attributes:
        raw = [attribute_value(player, attribute) for player in players]
        if attribute in compressed:
            raw = [compress(value) for value in raw]
        columns[attribute] = raw

    ranges = {attribute: attribute_range(values) for attribute, values in columns.items()}
    return [
        {attribute: normalize_value(columns[attribute][index], ranges[attribute]) for attribute in attributes}
        for index in range(len(players))
    ]
