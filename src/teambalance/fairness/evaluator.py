"""Balance metrics over a set of teams."""

from __future__ import annotations

import math
from typing import List, Sequence, Union

from teambalance.errors import EmptyTeamSetError
from teambalance.models import AssignmentResult, FairnessReport, Grade, ScoreRange, SizeBalance, Team


# Largest possible variance of values bounded in [0, 1].
MAX_POSSIBLE_VARIANCE = 0.25


def team_means(teams: Sequence[Team]) -> List[float]:
    return [team.average_score for team in teams]


def score_variance(values: Sequence[float]) -> float:
    """Population variance; zero for an empty sequence."""

    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum((value - mean) ** 2 for value in values) / len(values)


def balance_coefficient(
    teams_or_means: Union[Sequence[Team], Sequence[float]],
    max_possible_variance: float = MAX_POSSIBLE_VARIANCE,
) -> float:
    """1.0 for identical team averages, falling toward 0.0 as they spread."""

    values = [
        item.average_score if isinstance(item, Team) else float(item)
        for item in teams_or_means
    ]
    return max(0.0, 1.0 - score_variance(values) / max_possible_variance)


def assess_grade(std_dev: float, size_difference: int) -> Grade:
    if std_dev < 0.05 and size_difference == 0:
        return "excellent"
    if std_dev < 0.10 and size_difference <= 1:
        return "good"
    if std_dev < 0.20 and size_difference <= 1:
        return "fair"
    return "poor"


def justify(grade: Grade, std_dev: float, sizes: Sequence[int]) -> str:
    sizes_text = ", ".join(str(size) for size in sizes)
    percent = f"{std_dev * 100:.1f}"
    if grade == "excellent":
        return (
            f"Teams are excellently balanced with {percent}% score deviation and equal sizes "
            f"({sizes_text}). Snake draft ensured optimal distribution."
        )
    if grade == "good":
        return (
            f"Teams are well-balanced with {percent}% score deviation and sizes ({sizes_text}). "
            "Minor differences are within acceptable limits."
        )
    if grade == "fair":
        return (
            f"Teams show fair balance with {percent}% score deviation. Team sizes ({sizes_text}) "
            "differ by at most 1 player as required."
        )
    return (
        f"Team balance could be improved. Score deviation is {percent}% with sizes ({sizes_text}). "
        "Consider a different distribution strategy."
    )


def evaluate_fairness(result_or_teams: Union[AssignmentResult, Sequence[Team]]) -> FairnessReport:
    """Compute the fairness report for an assignment or a bare list of teams."""

    teams = result_or_teams.teams if isinstance(result_or_teams, AssignmentResult) else result_or_teams
    if not teams:
        raise EmptyTeamSetError("No teams to analyze")

    averages = team_means(teams)
    sizes = [team.size for team in teams]
    variance = score_variance(averages)
    std_dev = math.sqrt(variance)
    size_difference = max(sizes) - min(sizes)
    grade = assess_grade(std_dev, size_difference)

    return FairnessReport(
        score_standard_deviation=std_dev,
        score_variance=variance,
        score_range=ScoreRange(min=min(averages), max=max(averages)),
        size_balance=SizeBalance(
            min_size=min(sizes),
            max_size=max(sizes),
            size_difference=size_difference,
        ),
        balance_coefficient=balance_coefficient(averages),
        grade=grade,
        justification=justify(grade, std_dev, sizes),
        team_sizes=tuple(sizes),
        team_averages=tuple(averages),
    )
