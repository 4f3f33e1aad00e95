"""Helpers to load player CSVs and validate them before scoring."""

from __future__ import annotations

import csv
import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, TextIO, Tuple

from pydantic import ValidationError

from teambalance.errors import DuplicatePlayerError, InvalidPlayerDataError, InvalidTeamCountError
from teambalance.models import SECONDARY_FEATURES, PlayerRecord


logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = (
    "historical_events_participated",
    "historical_event_engagements",
    "historical_points_earned",
    "historical_points_spent",
    "historical_messages_sent",
    "current_total_points",
    "days_active_last_30",
    "current_streak_value",
)

MAX_ACTIVE_DAYS = 30


@dataclass(frozen=True)
class InvalidRow:
    line_number: int
    player_id: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_number} (player_id={self.player_id!r}): {self.reason}"


@dataclass(frozen=True)
class MetricRange:
    min: float
    max: float
    avg: float


@dataclass(frozen=True)
class DataSummary:
    total_players: int
    engagement_range: MetricRange
    activity_range: MetricRange
    points_range: MetricRange
    current_teams: Tuple[int, ...]
    players_with_features: int


def _parse_number(raw: str | None) -> float:
    text = (raw or "").strip()
    if not text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_int(raw: str | None) -> int:
    return int(_parse_number(raw))


def _parse_player_id(raw: str | None) -> int:
    text = (raw or "").strip()
    try:
        value = int(text)
    except ValueError:
        raise ValueError("player_id is not an integer") from None
    if value < 1:
        raise ValueError("player_id must be positive")
    return value


def _row_to_record(row: Mapping[str, str | None]) -> PlayerRecord:
    features: Dict[str, float] = {
        name: _parse_number(row.get(name))
        for name in SECONDARY_FEATURES
        if (row.get(name) or "").strip()
    }
    data: Dict[str, object] = {name: _parse_number(row.get(name)) for name in NUMERIC_COLUMNS}
    data.update(
        player_id=_parse_player_id(row.get("player_id")),
        last_active_ts=(row.get("last_active_ts") or "").strip(),
        current_team_id=_parse_int(row.get("current_team_id")),
        current_team_name=(row.get("current_team_name") or "").strip(),
        features=features,
    )
    return PlayerRecord(**data)


def read_players(handle: TextIO) -> List[PlayerRecord]:
    """Parse player rows from an open CSV stream.

    Unparsable numeric cells read as 0; rows without a usable ``player_id``
    are collected and reported together once the stream is exhausted.
    """

    reader = csv.DictReader(handle)
    players: List[PlayerRecord] = []
    invalid: List[InvalidRow] = []
    # Header occupies line 1.
    for line_number, row in enumerate(reader, start=2):
        try:
            players.append(_row_to_record(row))
        except (ValueError, ValidationError) as exc:
            invalid.append(InvalidRow(line_number, (row.get("player_id") or "").strip(), str(exc)))

    if invalid:
        raise InvalidPlayerDataError(f"Failed to parse {len(invalid)} rows", invalid)

    logger.info("Parsed %d players", len(players))
    return players


def load_players_csv(path: Path) -> List[PlayerRecord]:
    try:
        with path.open(newline="", encoding="utf-8-sig") as f:
            return read_players(f)
    except UnicodeDecodeError as exc:
        raise InvalidPlayerDataError(f"{path} is not valid UTF-8: {exc.reason}", []) from exc


def clean_players(players: Iterable[PlayerRecord]) -> List[PlayerRecord]:
    """Clamp numeric attributes at zero and cap active days at 30."""

    cleaned: List[PlayerRecord] = []
    for player in players:
        updates: Dict[str, float] = {}
        for column in NUMERIC_COLUMNS:
            value = getattr(player, column)
            bounded = max(0.0, value)
            if column == "days_active_last_30":
                bounded = min(float(MAX_ACTIVE_DAYS), bounded)
            if bounded != value:
                updates[column] = bounded
        if updates:
            logger.debug("Clamped %s for player %d", sorted(updates), player.player_id)
            player = player.model_copy(update=updates)
        cleaned.append(player)
    return cleaned


def find_duplicate_ids(players: Iterable[PlayerRecord]) -> List[int]:
    seen: set[int] = set()
    duplicates: List[int] = []
    for player in players:
        if player.player_id in seen and player.player_id not in duplicates:
            duplicates.append(player.player_id)
        seen.add(player.player_id)
    return duplicates


def validate_players(players: Sequence[PlayerRecord]) -> None:
    duplicates = find_duplicate_ids(players)
    if duplicates:
        raise DuplicatePlayerError(
            f"Duplicate player ids: {', '.join(str(player_id) for player_id in duplicates)}",
            duplicates,
        )


def validate_team_constraints(total_players: int, target_teams: int) -> None:
    """Boundary rules applied before a run: at least two teams of two players each."""

    if target_teams < 2:
        raise InvalidTeamCountError(
            "Number of teams must be at least 2", population=total_players, target_teams=target_teams
        )
    if target_teams > total_players:
        raise InvalidTeamCountError(
            f"Cannot create {target_teams} teams with only {total_players} players",
            population=total_players,
            target_teams=target_teams,
        )
    if total_players < target_teams * 2:
        raise InvalidTeamCountError(
            f"Too few players ({total_players}) for {target_teams} teams. "
            f"Need at least {target_teams * 2} players",
            population=total_players,
            target_teams=target_teams,
        )


def _metric_range(values: Sequence[float]) -> MetricRange:
    return MetricRange(min=min(values), max=max(values), avg=sum(values) / len(values))


def summarize_players(players: Sequence[PlayerRecord]) -> DataSummary:
    if not players:
        raise ValueError("No players to analyze")

    return DataSummary(
        total_players=len(players),
        engagement_range=_metric_range([p.historical_event_engagements for p in players]),
        activity_range=_metric_range([p.days_active_last_30 for p in players]),
        points_range=_metric_range([p.current_total_points for p in players]),
        current_teams=tuple(sorted({p.current_team_id for p in players})),
        players_with_features=sum(1 for p in players if p.has_features),
    )
