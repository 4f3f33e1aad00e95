"""Data models for players, teams and assignment results."""

from .player import BASE_ATTRIBUTES, SECONDARY_FEATURES, PlayerRecord, ScoredPlayer
from .team import (
    AssignmentResult,
    FairnessReport,
    Grade,
    OptimizationResult,
    ScoreRange,
    SizeBalance,
    Team,
)

__all__ = [
    "AssignmentResult",
    "BASE_ATTRIBUTES",
    "FairnessReport",
    "Grade",
    "OptimizationResult",
    "PlayerRecord",
    "SECONDARY_FEATURES",
    "ScoreRange",
    "ScoredPlayer",
    "SizeBalance",
    "Team",
]
