"""Text and CSV renderings of an assignment result."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from io import StringIO
from typing import List, Sequence

from teambalance.models import AssignmentResult, Team


CSV_HEADERS = ("player_id", "new_team_id", "composite_score", "old_team_id", "old_team_name")

_SIZE_BALANCE_LABELS = {0: "perfect", 1: "acceptable"}


@dataclass(frozen=True)
class AssignmentRow:
    player_id: int
    new_team_id: int
    composite_score: float
    old_team_id: int
    old_team_name: str

    @property
    def moved(self) -> bool:
        return self.old_team_id != self.new_team_id


@dataclass(frozen=True)
class PlayerMove:
    player_id: int
    composite_score: float
    from_team: str
    to_team: int


def export_assignments(result: AssignmentResult) -> List[AssignmentRow]:
    """Flatten teams into one row per player, ordered by player id."""

    rows = [
        AssignmentRow(
            player_id=scored.player_id,
            new_team_id=team.team_id,
            composite_score=scored.composite_score,
            old_team_id=scored.player.current_team_id,
            old_team_name=scored.player.current_team_name,
        )
        for team in result.teams
        for scored in team.players
    ]
    rows.sort(key=lambda row: row.player_id)
    return rows


def _previous_team_label(row: AssignmentRow) -> str:
    return row.old_team_name or f"Team {row.old_team_id}"


def player_moves(result: AssignmentResult) -> List[PlayerMove]:
    return [
        PlayerMove(
            player_id=row.player_id,
            composite_score=row.composite_score,
            from_team=_previous_team_label(row),
            to_team=row.new_team_id,
        )
        for row in export_assignments(result)
        if row.moved
    ]


def format_csv(result: AssignmentResult) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in export_assignments(result):
        writer.writerow(
            [
                row.player_id,
                row.new_team_id,
                f"{row.composite_score:.4f}",
                row.old_team_id,
                row.old_team_name,
            ]
        )
    return buffer.getvalue()


def format_simple(result: AssignmentResult) -> str:
    """One ``player_id,team_id,score`` line per player, suitable for piping."""

    return "".join(
        f"{row.player_id},{row.new_team_id},{row.composite_score:.4f}\n" for row in export_assignments(result)
    )


def _format_team_details(teams: Sequence[Team]) -> List[str]:
    lines = ["Team details:", ""]
    for team in teams:
        lines.append(f"Team {team.team_id} ({team.size} players)")
        lines.append(f"  Average score: {team.average_score:.3f} | Total score: {team.total_score:.2f}")
        for scored in sorted(team.players, key=lambda item: (-item.composite_score, item.player_id)):
            previous = scored.player.current_team_name
            suffix = f" (was: {previous})" if previous else ""
            lines.append(f"  - Player {scored.player_id}: score {scored.composite_score:.3f}{suffix}")
        lines.append("")
    return lines


def format_summary(result: AssignmentResult) -> str:
    """Human-readable report: header, per-team members and balance analysis."""

    fairness = result.fairness
    size_balance = fairness.size_balance
    lines = [
        "TEAM REASSIGNMENT RESULTS",
        "",
        f"Total players: {result.total_players}",
        f"Target teams: {result.target_teams}",
        f"Seed used: {result.seed}",
        "",
    ]
    lines.extend(_format_team_details(result.teams))
    lines.extend(
        [
            "Balance analysis:",
            f"  Standard deviation: {fairness.score_standard_deviation:.4f}",
            f"  Score range: {fairness.score_range.min:.3f} - {fairness.score_range.max:.3f}",
            f"  Range span: {fairness.score_range.span:.3f}",
            f"  Team sizes: {size_balance.min_size} - {size_balance.max_size} players",
            f"  Size difference: {size_balance.size_difference} "
            f"({_SIZE_BALANCE_LABELS.get(size_balance.size_difference, 'poor')})",
            f"  Balance coefficient: {fairness.balance_coefficient:.4f}",
            f"  Grade: {fairness.grade}",
            "",
            fairness.justification,
        ]
    )
    if result.optimization is not None:
        optimization = result.optimization
        lines.extend(
            [
                "",
                f"Optimization: {optimization.iterations} iterations, "
                f"{optimization.improvement * 100:.2f}% improvement "
                f"({optimization.initial_balance:.4f} -> {optimization.final_balance:.4f})",
            ]
        )
    return "\n".join(lines) + "\n"


def format_team_table(teams: Sequence[Team]) -> str:
    total_players = sum(team.size for team in teams)
    header = f"{'Team':>6} {'Players':>8} {'Avg Score':>10} {'Total Score':>12} {'Size Ratio':>11}"
    lines = [header, "-" * len(header)]
    for team in teams:
        ratio = team.size / total_players * 100 if total_players else 0.0
        lines.append(
            f"{team.team_id:>6} {team.size:>8} {team.average_score:>10.3f} "
            f"{team.total_score:>12.2f} {ratio:>10.1f}%"
        )
    return "\n".join(lines) + "\n"


def format_changes(result: AssignmentResult) -> str:
    moves = player_moves(result)
    stayed = result.total_players - len(moves)
    rate = len(moves) / result.total_players * 100 if result.total_players else 0.0
    lines = [
        "Assignment changes:",
        f"  Players who stayed: {stayed}",
        f"  Players who moved: {len(moves)}",
        f"  Movement rate: {rate:.1f}%",
    ]
    if moves:
        lines.append("")
        lines.append("Player movements:")
        lines.extend(f"  Player {move.player_id}: {move.from_team} -> Team {move.to_team}" for move in moves)
    return "\n".join(lines) + "\n"


__all__ = [
    "AssignmentRow",
    "CSV_HEADERS",
    "PlayerMove",
    "export_assignments",
    "format_changes",
    "format_csv",
    "format_simple",
    "format_summary",
    "format_team_table",
    "player_moves",
]
