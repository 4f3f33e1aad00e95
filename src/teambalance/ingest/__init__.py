"""Input adapters that load and validate raw player data."""

from .players import (
    DataSummary,
    InvalidRow,
    MetricRange,
    clean_players,
    find_duplicate_ids,
    load_players_csv,
    read_players,
    summarize_players,
    validate_players,
    validate_team_constraints,
)

__all__ = [
    "DataSummary",
    "InvalidRow",
    "MetricRange",
    "clean_players",
    "find_duplicate_ids",
    "load_players_csv",
    "read_players",
    "summarize_players",
    "validate_players",
    "validate_team_constraints",
]
