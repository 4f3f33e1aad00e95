import logging

import pytest

from teambalance import assign_teams, evaluate_fairness, run_assignment
from teambalance.assignment import combine_seed, data_seed, effective_seed
from teambalance.errors import EmptyPopulationError, InvalidTeamCountError
from teambalance.models import PlayerRecord, ScoredPlayer


def _scored(scores, first_id: int = 1):
    return [ScoredPlayer(PlayerRecord(player_id=first_id + i), score) for i, score in enumerate(scores)]


def _players(count: int, first_id: int = 1):
    return [
        PlayerRecord(
            player_id=first_id + i,
            historical_event_engagements=(i * 13) % 29,
            days_active_last_30=(i * 7) % 31,
            current_total_points=(i * 97) % 1000,
            current_streak_value=i % 6,
            current_team_id=i % 3 + 1,
        )
        for i in range(count)
    ]


def _membership(result):
    return [frozenset(team.player_ids) for team in result.teams]


def test_evenly_spaced_scores_balance_into_equal_teams():
    scored = _scored([i / 11 for i in range(12)])
    result = assign_teams(scored, 3, seed=42)

    assert [team.size for team in result.teams] == [4, 4, 4]
    assert result.fairness.size_balance.size_difference == 0
    assert result.fairness.grade in ("excellent", "good")
    assert result.seed == combine_seed(42, data_seed(range(1, 13)))


def test_seven_players_three_teams_sizes():
    result = assign_teams(_scored([0.05 * i for i in range(7)]), 3)
    sizes = [team.size for team in result.teams]

    assert sum(sizes) == 7
    assert max(sizes) - min(sizes) == 1


def test_tied_scores_are_shuffled_by_seed():
    scored = _scored([0.5, 0.5, 0.5, 0.5])
    for seed in (7, 99):
        result = assign_teams(scored, 2, seed=seed)
        assert [team.size for team in result.teams] == [2, 2]
        assert _membership(assign_teams(scored, 2, seed=seed)) == _membership(result)

    assert assign_teams(scored, 2, seed=7).seed != assign_teams(scored, 2, seed=99).seed
    layouts = {frozenset(_membership(assign_teams(scored, 2, seed=seed))) for seed in range(20)}
    assert len(layouts) > 1


def test_single_player_cannot_fill_two_teams():
    with pytest.raises(InvalidTeamCountError):
        assign_teams(_scored([0.4]), 2)


def test_empty_population_raises():
    with pytest.raises(EmptyPopulationError):
        assign_teams([], 2)


def test_run_assignment_is_deterministic():
    players = _players(23)
    first = run_assignment(players, 4, seed=42)
    second = run_assignment(players, 4, seed=42)

    assert _membership(first) == _membership(second)
    assert first.seed == second.seed
    assert first.caller_seed == 42


def test_every_player_assigned_once():
    players = _players(31)
    result = run_assignment(players, 5, seed=3)

    assigned = sorted(pid for team in result.teams for pid in team.player_ids)
    assert assigned == list(range(1, 32))
    assert result.total_players == 31
    assert result.team_of(17) is not None
    assert result.team_of(999) is None


def test_seed_sensitivity_across_populations():
    first = effective_seed(_scored([0.1] * 10, first_id=1), 42)
    second = effective_seed(_scored([0.1] * 10, first_id=2), 42)
    assert first != second


def test_data_seed_used_without_caller_seed():
    scored = _scored([0.2, 0.4, 0.6])
    result = assign_teams(scored, 2)

    assert result.seed == data_seed([1, 2, 3])
    assert result.caller_seed is None


def test_optimization_never_lowers_balance():
    players = _players(19)
    unoptimized = run_assignment(players, 3, seed=11, optimize=False)
    optimized = run_assignment(players, 3, seed=11)

    assert unoptimized.optimization is None
    assert optimized.optimization is not None
    assert optimized.fairness.balance_coefficient >= unoptimized.fairness.balance_coefficient
    assert optimized.optimization.iterations <= 100


def test_fairness_matches_standalone_evaluation():
    result = run_assignment(_players(12), 3, seed=5)
    assert evaluate_fairness(result) == result.fairness


def test_max_iterations_from_environment(monkeypatch):
    monkeypatch.setenv("TEAMBALANCE_MAX_ITERATIONS", "0")
    result = run_assignment(_players(10), 2, seed=1)
    assert result.optimization.iterations == 0

    explicit = run_assignment(_players(10), 2, seed=1, max_iterations=5)
    assert explicit.optimization.iterations <= 5


def test_invalid_environment_value_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("TEAMBALANCE_MAX_ITERATIONS", "lots")
    with caplog.at_level(logging.WARNING, logger="teambalance.assignment.service"):
        result = run_assignment(_players(10), 2, seed=1)

    assert result.optimization is not None
    assert "TEAMBALANCE_MAX_ITERATIONS" in caplog.text


def test_seed_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger="teambalance.assignment.service"):
        assign_teams(_scored([0.1, 0.2, 0.3, 0.4]), 2, seed=42)

    assert "Using caller seed 42" in caplog.text
    assert "Balance optimization" in caplog.text
