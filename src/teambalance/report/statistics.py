"""Descriptive statistics over teams, scores and player movement."""

from __future__ import annotations

import math
import statistics
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from teambalance.models import AssignmentResult, ScoredPlayer, Team

from .export import PlayerMove, player_moves


ACTIVE_DAYS_THRESHOLD = 7
HISTOGRAM_BINS = 5
TOP_MOVERS = 10


@dataclass(frozen=True)
class PlayerScore:
    player_id: int
    score: float


@dataclass(frozen=True)
class TeamStatistics:
    team_id: int
    size: int
    average_score: float
    median_score: float
    score_std_dev: float
    min_score: float
    max_score: float
    top_player: Optional[PlayerScore]
    bottom_player: Optional[PlayerScore]


@dataclass(frozen=True)
class HistogramBin:
    range: str
    count: int


@dataclass(frozen=True)
class ScoreDistribution:
    mean: float
    median: float
    std_dev: float
    min: float
    max: float
    quartiles: Tuple[float, float, float]
    team_histograms: Dict[int, Tuple[HistogramBin, ...]]


@dataclass(frozen=True)
class TeamMoveCount:
    from_team: str
    to_team: int
    count: int


@dataclass(frozen=True)
class PlayerMovement:
    total_moves: int
    movement_rate: float
    moves_by_team: Tuple[TeamMoveCount, ...]
    top_movers: Tuple[PlayerMove, ...]


@dataclass(frozen=True)
class ActivityStats:
    overall_active_percentage: float
    team_active_percentages: Dict[int, float]


@dataclass(frozen=True)
class SummaryStats:
    mean: float
    std: float
    min: float
    max: float


@dataclass(frozen=True)
class ComponentAnalysis:
    primary: SummaryStats
    secondary: SummaryStats
    correlation: float
    secondary_impact: float


def _pstdev(values: Sequence[float]) -> float:
    return statistics.pstdev(values) if len(values) > 1 else 0.0


def team_statistics(team: Team) -> TeamStatistics:
    if not team.players:
        return TeamStatistics(team.team_id, 0, 0.0, 0.0, 0.0, 0.0, 0.0, None, None)

    scores = [player.composite_score for player in team.players]
    ranked = sorted(team.players, key=lambda player: (-player.composite_score, player.player_id))
    top, bottom = ranked[0], ranked[-1]
    return TeamStatistics(
        team_id=team.team_id,
        size=team.size,
        average_score=team.average_score,
        median_score=statistics.median(scores),
        score_std_dev=_pstdev(scores),
        min_score=min(scores),
        max_score=max(scores),
        top_player=PlayerScore(top.player_id, top.composite_score),
        bottom_player=PlayerScore(bottom.player_id, bottom.composite_score),
    )


def score_histogram(scores: Sequence[float], bins: int = HISTOGRAM_BINS) -> Tuple[HistogramBin, ...]:
    """Equal-width bins between min and max; the last bin is closed on both ends."""

    if not scores:
        return ()
    low, high = min(scores), max(scores)
    width = (high - low) / bins
    histogram: List[HistogramBin] = []
    for index in range(bins):
        start = low + index * width
        last = index == bins - 1
        end = high if last else low + (index + 1) * width
        count = sum(1 for score in scores if score >= start and (score <= end if last else score < end))
        histogram.append(HistogramBin(f"{start:.3f}-{end:.3f}", count))
    return tuple(histogram)


def score_distribution(result: AssignmentResult) -> ScoreDistribution:
    scores = [player.composite_score for team in result.teams for player in team.players]
    if not scores:
        raise ValueError("No scores to analyze")

    ordered = sorted(scores)
    median = statistics.median(ordered)
    quartiles = (
        ordered[int(len(ordered) * 0.25)],
        median,
        ordered[int(len(ordered) * 0.75)],
    )
    return ScoreDistribution(
        mean=statistics.fmean(scores),
        median=median,
        std_dev=_pstdev(scores),
        min=ordered[0],
        max=ordered[-1],
        quartiles=quartiles,
        team_histograms={
            team.team_id: score_histogram([player.composite_score for player in team.players])
            for team in result.teams
        },
    )


def gini_coefficient(values: Sequence[float]) -> float:
    """Inequality of ``values`` in [0, 1); 0 for empty or all-zero input."""

    if not values:
        return 0.0
    ordered = sorted(values)
    total = sum(ordered)
    if total == 0:
        return 0.0
    n = len(ordered)
    weighted = sum((2 * (i + 1) - n - 1) * value for i, value in enumerate(ordered))
    return weighted / (n * total)


def player_movement(result: AssignmentResult) -> PlayerMovement:
    moves = player_moves(result)
    pairs = Counter((move.from_team, move.to_team) for move in moves)
    moves_by_team = sorted(
        (TeamMoveCount(from_team, to_team, count) for (from_team, to_team), count in pairs.items()),
        key=lambda item: -item.count,
    )
    top_movers = sorted(moves, key=lambda move: -move.composite_score)[:TOP_MOVERS]
    rate = len(moves) / result.total_players * 100 if result.total_players else 0.0
    return PlayerMovement(
        total_moves=len(moves),
        movement_rate=rate,
        moves_by_team=tuple(moves_by_team),
        top_movers=tuple(top_movers),
    )


def _is_active(player: ScoredPlayer) -> bool:
    return player.player.days_active_last_30 >= ACTIVE_DAYS_THRESHOLD


def _percentage(part: int, whole: int) -> float:
    return round(part / whole * 100, 2) if whole else 0.0


def activity_stats(teams: Sequence[Team]) -> ActivityStats:
    """Share of recently active players, using 7+ active days out of 30 as the proxy."""

    everyone = [player for team in teams for player in team.players]
    return ActivityStats(
        overall_active_percentage=_percentage(sum(1 for p in everyone if _is_active(p)), len(everyone)),
        team_active_percentages={
            team.team_id: _percentage(sum(1 for p in team.players if _is_active(p)), team.size)
            for team in teams
        },
    )


def _summary(values: Sequence[float]) -> SummaryStats:
    return SummaryStats(statistics.fmean(values), _pstdev(values), min(values), max(values))


def _pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    mean_x = statistics.fmean(xs)
    mean_y = statistics.fmean(ys)
    numerator = sum((x - mean_x) * (y - mean_y) for x, y in zip(xs, ys))
    denominator = math.sqrt(sum((x - mean_x) ** 2 for x in xs) * sum((y - mean_y) ** 2 for y in ys))
    return numerator / denominator if denominator else 0.0


def _ranks(values: Sequence[float]) -> List[int]:
    order = sorted(range(len(values)), key=lambda index: -values[index])
    ranks = [0] * len(values)
    for rank, index in enumerate(order):
        ranks[index] = rank
    return ranks


def score_components(scored: Sequence[ScoredPlayer]) -> ComponentAnalysis:
    """Compare primary and secondary sub-scores of an extended scoring run.

    ``secondary_impact`` is the mean absolute rank change between ordering by
    primary score alone and by composite score, divided by the player count.
    """

    if not scored:
        raise ValueError("No players to analyze")
    if any(player.primary_score is None or player.secondary_score is None for player in scored):
        raise ValueError("Component analysis requires extended scoring")

    primary = [float(player.primary_score) for player in scored]
    secondary = [float(player.secondary_score) for player in scored]
    composite = [player.composite_score for player in scored]

    rank_changes = [abs(a - b) for a, b in zip(_ranks(primary), _ranks(composite))]
    return ComponentAnalysis(
        primary=_summary(primary),
        secondary=_summary(secondary),
        correlation=_pearson(primary, secondary),
        secondary_impact=statistics.fmean(rank_changes) / len(scored),
    )


__all__ = [
    "ActivityStats",
    "ComponentAnalysis",
    "HistogramBin",
    "PlayerMovement",
    "PlayerScore",
    "ScoreDistribution",
    "SummaryStats",
    "TeamMoveCount",
    "TeamStatistics",
    "activity_stats",
    "gini_coefficient",
    "player_movement",
    "score_components",
    "score_distribution",
    "score_histogram",
    "team_statistics",
]
