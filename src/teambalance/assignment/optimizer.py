"""Greedy pairwise swap search that raises the balance coefficient."""

from __future__ import annotations

from typing import List, Optional, Sequence

from teambalance.errors import EmptyTeamSetError
from teambalance.fairness import balance_coefficient, team_means
from teambalance.models import OptimizationResult, ScoredPlayer, Team


DEFAULT_MAX_ITERATIONS = 100


def _average(players: Sequence[ScoredPlayer]) -> float:
    # Same arithmetic as Team.from_players so accepted candidates score identically.
    if not players:
        return 0.0
    return sum(player.composite_score for player in players) / len(players)


def _first_improving_swap(teams: Sequence[Team], current_balance: float) -> Optional[List[Team]]:
    """Return the teams after the first strictly improving swap, scanning in fixed order."""

    means = team_means(teams)
    for i in range(len(teams)):
        left = list(teams[i].players)
        for j in range(i + 1, len(teams)):
            right = list(teams[j].players)
            for a in range(len(left)):
                for b in range(len(right)):
                    new_left = left.copy()
                    new_right = right.copy()
                    new_left[a], new_right[b] = right[b], left[a]

                    candidate = list(means)
                    candidate[i] = _average(new_left)
                    candidate[j] = _average(new_right)
                    if balance_coefficient(candidate) > current_balance:
                        swapped = list(teams)
                        swapped[i] = Team.from_players(teams[i].team_id, new_left)
                        swapped[j] = Team.from_players(teams[j].team_id, new_right)
                        return swapped
    return None


def optimize_teams(teams: Sequence[Team], *, max_iterations: int = DEFAULT_MAX_ITERATIONS) -> OptimizationResult:
    """Swap players between teams while the balance coefficient strictly improves.

    Each round accepts the first improving swap in ascending (team, team,
    member, member) order. The search stops after a round without an
    improving swap or after ``max_iterations`` rounds. Team sizes never change.
    """

    if not teams:
        raise EmptyTeamSetError("No teams to optimize")
    if max_iterations < 0:
        raise ValueError("max_iterations must be non-negative")

    current = list(teams)
    initial_balance = balance_coefficient(current)
    best = current
    best_balance = initial_balance
    iterations = 0

    for _ in range(max_iterations):
        iterations += 1
        improved = _first_improving_swap(current, balance_coefficient(current))
        if improved is None:
            break
        current = improved
        current_balance = balance_coefficient(current)
        if current_balance > best_balance:
            best = current
            best_balance = current_balance

    return OptimizationResult(
        teams=tuple(best),
        iterations=iterations,
        improvement=best_balance - initial_balance,
        initial_balance=initial_balance,
        final_balance=best_balance,
    )
