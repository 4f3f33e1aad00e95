"""Team and assignment result containers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Tuple

from .player import ScoredPlayer


Grade = Literal["excellent", "good", "fair", "poor"]


@dataclass(frozen=True)
class Team:
    team_id: int
    players: Tuple[ScoredPlayer, ...]
    size: int
    total_score: float
    average_score: float

    @classmethod
    def from_players(cls, team_id: int, players: Iterable[ScoredPlayer]) -> "Team":
        """Build a team and derive its aggregates from ``players``."""

        members = tuple(players)
        total = sum(player.composite_score for player in members)
        average = total / len(members) if members else 0.0
        return cls(
            team_id=team_id,
            players=members,
            size=len(members),
            total_score=total,
            average_score=average,
        )

    @property
    def player_ids(self) -> Tuple[int, ...]:
        return tuple(player.player_id for player in self.players)


@dataclass(frozen=True)
class ScoreRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class SizeBalance:
    min_size: int
    max_size: int
    size_difference: int


@dataclass(frozen=True)
class FairnessReport:
    """Cross-team balance statistics derived from a set of teams."""

    score_standard_deviation: float
    score_variance: float
    score_range: ScoreRange
    size_balance: SizeBalance
    balance_coefficient: float
    grade: Grade
    justification: str
    team_sizes: Tuple[int, ...]
    team_averages: Tuple[float, ...]


@dataclass(frozen=True)
class OptimizationResult:
    teams: Tuple[Team, ...]
    iterations: int
    improvement: float
    initial_balance: float
    final_balance: float


@dataclass(frozen=True)
class AssignmentResult:
    """Outcome of a single assignment run."""

    teams: Tuple[Team, ...]
    total_players: int
    target_teams: int
    seed: int
    fairness: FairnessReport
    caller_seed: Optional[int] = None
    optimization: Optional[OptimizationResult] = None

    def team_of(self, player_id: int) -> Optional[int]:
        for team in self.teams:
            if player_id in team.player_ids:
                return team.team_id
        return None
