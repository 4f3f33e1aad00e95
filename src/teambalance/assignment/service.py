"""Entry points that turn scored players into a fair team assignment."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence, Union

from teambalance.config import Weights
from teambalance.fairness import evaluate_fairness
from teambalance.models import AssignmentResult, PlayerRecord, ScoredPlayer
from teambalance.scoring import score_players

from .builder import DEFAULT_TIE_THRESHOLD, build_teams, check_team_count
from .deterministic import SequenceGenerator, combine_seed, data_seed, describe_seed
from .optimizer import DEFAULT_MAX_ITERATIONS, optimize_teams


logger = logging.getLogger(__name__)

_MAX_ITERATIONS_ENV = "TEAMBALANCE_MAX_ITERATIONS"
_TIE_THRESHOLD_ENV = "TEAMBALANCE_TIE_THRESHOLD"


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _max_iterations() -> int:
    return _env_int(_MAX_ITERATIONS_ENV, DEFAULT_MAX_ITERATIONS, min_value=0)


def _tie_threshold() -> float:
    return _env_float(_TIE_THRESHOLD_ENV, DEFAULT_TIE_THRESHOLD, clamp_min=0.0, clamp_max=1.0)


def effective_seed(scored: Sequence[ScoredPlayer], seed: Optional[int] = None) -> int:
    return combine_seed(seed, data_seed(player.player_id for player in scored))


def assign_teams(
    scored: Sequence[ScoredPlayer],
    target_teams: int,
    *,
    seed: Optional[int] = None,
    optimize: bool = True,
    max_iterations: Optional[int] = None,
    tie_threshold: Optional[float] = None,
) -> AssignmentResult:
    """Assign scored players to ``target_teams`` balanced teams.

    The same players, team count and ``seed`` always produce the same teams.
    Without ``seed`` the run is seeded from the player ids alone.
    """

    check_team_count(len(scored), target_teams)

    final_seed = effective_seed(scored, seed)
    rng = SequenceGenerator(final_seed)
    logger.info(describe_seed(seed, final_seed))

    threshold = tie_threshold if tie_threshold is not None else _tie_threshold()
    teams = build_teams(scored, target_teams, rng, tie_threshold=threshold)

    optimization = None
    if optimize:
        budget = max_iterations if max_iterations is not None else _max_iterations()
        optimization = optimize_teams(teams, max_iterations=budget)
        teams = list(optimization.teams)
        logger.info(
            "Balance optimization: %d iterations, %.2f%% improvement",
            optimization.iterations,
            optimization.improvement * 100,
        )

    return AssignmentResult(
        teams=tuple(teams),
        total_players=len(scored),
        target_teams=target_teams,
        seed=final_seed,
        caller_seed=seed,
        fairness=evaluate_fairness(teams),
        optimization=optimization,
    )


def run_assignment(
    players: Sequence[PlayerRecord],
    target_teams: int,
    *,
    weights: Union[Weights, str, None] = None,
    robust: bool = False,
    seed: Optional[int] = None,
    optimize: bool = True,
    max_iterations: Optional[int] = None,
) -> AssignmentResult:
    """Score ``players`` and assign them in one call."""

    scored = score_players(players, weights, robust=robust)
    return assign_teams(
        scored,
        target_teams,
        seed=seed,
        optimize=optimize,
        max_iterations=max_iterations,
    )
