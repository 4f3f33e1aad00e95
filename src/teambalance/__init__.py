"""Deterministic, fairness-constrained team reassignment."""

from teambalance.assignment import assign_teams, run_assignment
from teambalance.fairness import evaluate_fairness
from teambalance.scoring import score_players

__all__ = [
    "assign_teams",
    "evaluate_fairness",
    "run_assignment",
    "score_players",
]
