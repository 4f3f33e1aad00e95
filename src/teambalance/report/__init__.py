"""Reporting helpers for assignment results."""

from .export import (
    AssignmentRow,
    PlayerMove,
    export_assignments,
    format_changes,
    format_csv,
    format_simple,
    format_summary,
    format_team_table,
)
from .statistics import (
    activity_stats,
    gini_coefficient,
    player_movement,
    score_components,
    score_distribution,
    team_statistics,
)

__all__ = [
    "AssignmentRow",
    "PlayerMove",
    "activity_stats",
    "export_assignments",
    "format_changes",
    "format_csv",
    "format_simple",
    "format_summary",
    "format_team_table",
    "gini_coefficient",
    "player_movement",
    "score_components",
    "score_distribution",
    "team_statistics",
]
