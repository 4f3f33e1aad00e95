"""Deterministic team building and balance optimization."""

from .builder import (
    DEFAULT_TIE_THRESHOLD,
    break_ties,
    build_teams,
    check_team_count,
    expected_team_sizes,
    group_by_score,
    round_robin_teams,
    snake_indices,
    validate_team_sizes,
)
from .deterministic import SequenceGenerator, combine_seed, data_seed, describe_seed, validate_seed
from .optimizer import DEFAULT_MAX_ITERATIONS, optimize_teams
from .service import assign_teams, effective_seed, run_assignment

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TIE_THRESHOLD",
    "SequenceGenerator",
    "assign_teams",
    "break_ties",
    "build_teams",
    "check_team_count",
    "combine_seed",
    "data_seed",
    "describe_seed",
    "effective_seed",
    "expected_team_sizes",
    "group_by_score",
    "optimize_teams",
    "round_robin_teams",
    "run_assignment",
    "snake_indices",
    "validate_seed",
    "validate_team_sizes",
]
