"""Fairness evaluation of team assignments."""

from .evaluator import (
    MAX_POSSIBLE_VARIANCE,
    assess_grade,
    balance_coefficient,
    evaluate_fairness,
    justify,
    score_variance,
    team_means,
)

__all__ = [
    "MAX_POSSIBLE_VARIANCE",
    "assess_grade",
    "balance_coefficient",
    "evaluate_fairness",
    "justify",
    "score_variance",
    "team_means",
]
