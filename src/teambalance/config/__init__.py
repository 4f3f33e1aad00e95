"""Configuration helpers for scoring weights."""

from .weights import (
    DEFAULT_EXTENDED_WEIGHTS,
    DEFAULT_FEATURE_GROUPS,
    DEFAULT_WEIGHTS,
    ExtendedWeights,
    FeatureGroup,
    ScoringWeights,
    Weights,
    get_weights,
    get_weights_by_key,
    iter_presets,
)

__all__ = [
    "DEFAULT_EXTENDED_WEIGHTS",
    "DEFAULT_FEATURE_GROUPS",
    "DEFAULT_WEIGHTS",
    "ExtendedWeights",
    "FeatureGroup",
    "ScoringWeights",
    "Weights",
    "get_weights",
    "get_weights_by_key",
    "iter_presets",
]
