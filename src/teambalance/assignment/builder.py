"""Initial team construction: tie-broken snake draft."""

from __future__ import annotations

from typing import List, Sequence

from teambalance.errors import EmptyPopulationError, InvalidTeamCountError, TeamSizeError
from teambalance.models import ScoredPlayer, Team
from teambalance.scoring import rank_players

from .deterministic import SequenceGenerator


DEFAULT_TIE_THRESHOLD = 0.01


def check_team_count(population: int, target_teams: int) -> None:
    if population == 0:
        raise EmptyPopulationError("No players provided for team assignment")
    if target_teams < 2:
        raise InvalidTeamCountError(
            "Number of teams must be at least 2",
            population=population,
            target_teams=target_teams,
        )
    if target_teams > population:
        raise InvalidTeamCountError(
            f"Cannot create {target_teams} teams with only {population} players",
            population=population,
            target_teams=target_teams,
        )


def group_by_score(ranked: Sequence[ScoredPlayer], threshold: float) -> List[List[ScoredPlayer]]:
    """Split a descending-ranked list into bands of practically tied scores.

    A band closes once a score is more than ``threshold`` away from the
    band's first score.
    """

    bands: List[List[ScoredPlayer]] = []
    current: List[ScoredPlayer] = []
    for player in ranked:
        if current and abs(current[0].composite_score - player.composite_score) > threshold:
            bands.append(current)
            current = []
        current.append(player)
    if current:
        bands.append(current)
    return bands


def break_ties(
    scored: Sequence[ScoredPlayer],
    rng: SequenceGenerator,
    threshold: float = DEFAULT_TIE_THRESHOLD,
) -> List[ScoredPlayer]:
    """Rank players, then shuffle inside each score band."""

    ordered: List[ScoredPlayer] = []
    for band in group_by_score(rank_players(scored), threshold):
        ordered.extend(rng.shuffle(band))
    return ordered


def snake_indices(count: int, target_teams: int) -> List[int]:
    """Team index for each draft pick: 0..k-1, k-1..0, 0..k-1, ..."""

    indices: List[int] = []
    current = 0
    direction = 1
    for _ in range(count):
        indices.append(current)
        current += direction
        if current >= target_teams:
            current = target_teams - 1
            direction = -1
        elif current < 0:
            current = 0
            direction = 1
    return indices


def _teams_from_buckets(buckets: Sequence[Sequence[ScoredPlayer]]) -> List[Team]:
    return [Team.from_players(index + 1, bucket) for index, bucket in enumerate(buckets)]


def build_teams(
    scored: Sequence[ScoredPlayer],
    target_teams: int,
    rng: SequenceGenerator,
    *,
    tie_threshold: float = DEFAULT_TIE_THRESHOLD,
) -> List[Team]:
    """Distribute players over ``target_teams`` teams with a snake draft.

    Sizes differ by at most one and every player lands on exactly one team.
    """

    check_team_count(len(scored), target_teams)

    ordered = break_ties(scored, rng, tie_threshold)
    buckets: List[List[ScoredPlayer]] = [[] for _ in range(target_teams)]
    for player, index in zip(ordered, snake_indices(len(ordered), target_teams)):
        buckets[index].append(player)
    return _teams_from_buckets(buckets)


def round_robin_teams(scored: Sequence[ScoredPlayer], target_teams: int) -> List[Team]:
    """Plain ``rank % k`` dealing, kept as a baseline to compare the snake draft against."""

    check_team_count(len(scored), target_teams)

    buckets: List[List[ScoredPlayer]] = [[] for _ in range(target_teams)]
    for position, player in enumerate(rank_players(scored)):
        buckets[position % target_teams].append(player)
    return _teams_from_buckets(buckets)


def expected_team_sizes(total_players: int, target_teams: int) -> List[int]:
    base, remainder = divmod(total_players, target_teams)
    return [base + (1 if index < remainder else 0) for index in range(target_teams)]


def validate_team_sizes(teams: Sequence[Team]) -> None:
    sizes = [team.size for team in teams]
    if not sizes:
        raise TeamSizeError("No teams provided", sizes)
    difference = max(sizes) - min(sizes)
    if difference > 1:
        raise TeamSizeError(
            f"Team size difference is {difference} (max allowed: 1). Sizes: [{', '.join(map(str, sizes))}]",
            sizes,
        )
