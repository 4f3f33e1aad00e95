"""Exception types raised across scoring, assignment and ingestion."""

from __future__ import annotations

from typing import Any, Sequence


class TeamBalanceError(Exception):
    """Base class for every error raised by teambalance."""


class EmptyPopulationError(TeamBalanceError, ValueError):
    """Raised when scoring or team building is attempted on zero players."""


class InvalidTeamCountError(TeamBalanceError, ValueError):
    """Raised when the requested team count cannot be satisfied."""

    def __init__(self, message: str, *, population: int | None = None, target_teams: int | None = None):
        super().__init__(message)
        self.population = population
        self.target_teams = target_teams


class EmptyInputError(TeamBalanceError, LookupError):
    """Raised when a random pick is requested from an empty sequence."""


class EmptyTeamSetError(TeamBalanceError, ValueError):
    """Raised when fairness is evaluated before any team exists."""


class TeamSizeError(TeamBalanceError, ValueError):
    """Raised when team sizes differ by more than one player."""

    def __init__(self, message: str, sizes: Sequence[int]):
        super().__init__(message)
        self.sizes = list(sizes)


class InvalidSeedError(TeamBalanceError, ValueError):
    """Raised for seeds outside the accepted non-negative 31-bit range."""


class InvalidPlayerDataError(TeamBalanceError, ValueError):
    """Raised when player rows cannot be parsed; ``rows`` lists the offenders."""

    def __init__(self, message: str, rows: Sequence[Any]):
        super().__init__(message)
        self.rows = list(rows)


class DuplicatePlayerError(InvalidPlayerDataError):
    """Raised when the same player id appears more than once."""

    def __init__(self, message: str, duplicates: Sequence[int]):
        super().__init__(message, rows=duplicates)
        self.duplicates = list(duplicates)


__all__ = [
    "DuplicatePlayerError",
    "EmptyInputError",
    "EmptyPopulationError",
    "EmptyTeamSetError",
    "InvalidPlayerDataError",
    "InvalidSeedError",
    "InvalidTeamCountError",
    "TeamBalanceError",
    "TeamSizeError",
]
