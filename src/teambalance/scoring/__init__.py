"""Normalization and composite scoring of players."""

from .composite import (
    ScoreBreakdown,
    composite_score,
    rank_players,
    resolve_weights,
    score_breakdown,
    score_players,
    weighted_contributions,
)
from .normalize import (
    ROBUST_ATTRIBUTES,
    ValueRange,
    attribute_range,
    attribute_value,
    compress,
    normalize_attributes,
    normalize_value,
)

__all__ = [
    "ROBUST_ATTRIBUTES",
    "ScoreBreakdown",
    "ValueRange",
    "attribute_range",
    "attribute_value",
    "composite_score",
    "compress",
    "normalize_attributes",
    "normalize_value",
    "rank_players",
    "resolve_weights",
    "score_breakdown",
    "score_players",
    "weighted_contributions",
]
