"""Command-line interface for reassigning players to balanced teams."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from teambalance.assignment import assign_teams, validate_seed
from teambalance.config_loader import WeightsProfile
from teambalance.errors import InvalidPlayerDataError, TeamBalanceError
from teambalance.ingest import clean_players, load_players_csv, validate_players, validate_team_constraints
from teambalance.models import AssignmentResult, ScoredPlayer
from teambalance.report import (
    activity_stats,
    format_changes,
    format_csv,
    format_simple,
    format_summary,
    format_team_table,
    gini_coefficient,
    player_movement,
    score_components,
    score_distribution,
    team_statistics,
)
from teambalance.scoring import resolve_weights, score_players


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reassign players to balanced teams")
    parser.add_argument("players", type=Path, help="Path to players CSV")
    parser.add_argument("--teams", "-t", type=int, required=True, help="Number of teams to create")
    parser.add_argument("--seed", "-s", type=int, default=None, help="Seed for reproducible tie-breaking")
    parser.add_argument("--output", "-o", type=Path, default=None, help="Write output to this path instead of stdout")
    output_format = parser.add_mutually_exclusive_group()
    output_format.add_argument("--csv", action="store_true", help="Emit assignments as CSV")
    output_format.add_argument("--simple", action="store_true", help="Emit player_id,team_id,score lines")
    parser.add_argument("--no-optimize", action="store_true", help="Skip the swap-based balance optimization")
    parser.add_argument("--robust", action="store_true", help="Compress heavy-tailed attributes before normalizing")
    parser.add_argument("--stats", action="store_true", help="Append detailed statistics to the report")
    parser.add_argument("--verbose", action="store_true", help="Log progress at INFO level")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Maximum optimization rounds (default 100 or TEAMBALANCE_MAX_ITERATIONS)",
    )
    parser.add_argument("--load-profile", type=Path, help="Load scoring weights JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save scoring weights JSON", default=None)
    return parser.parse_args(argv)


def _format_stats(result: AssignmentResult, scored: Sequence[ScoredPlayer]) -> str:
    distribution = score_distribution(result)
    movement = player_movement(result)
    activity = activity_stats(result.teams)
    q1, q2, q3 = distribution.quartiles
    lines = [
        "Statistics:",
        f"  Mean score: {distribution.mean:.4f} (median {distribution.median:.4f}, std dev {distribution.std_dev:.4f})",
        f"  Quartiles: {q1:.4f} / {q2:.4f} / {q3:.4f}",
        f"  Gini coefficient of team averages: "
        f"{gini_coefficient([team.average_score for team in result.teams]):.4f}",
        f"  Movement rate: {movement.movement_rate:.1f}% ({movement.total_moves} moves)",
    ]
    for team in result.teams:
        stats = team_statistics(team)
        if stats.top_player is None or stats.bottom_player is None:
            continue
        lines.append(
            f"  Team {stats.team_id}: median {stats.median_score:.4f}, std dev {stats.score_std_dev:.4f}, "
            f"top player {stats.top_player.player_id} ({stats.top_player.score:.3f}), "
            f"bottom player {stats.bottom_player.player_id} ({stats.bottom_player.score:.3f})"
        )
    lines.append(f"  Active players (7+ days): {activity.overall_active_percentage:.2f}%")
    for team_id, percentage in activity.team_active_percentages.items():
        lines.append(f"    Team {team_id}: {percentage:.2f}% active")
    if scored and all(player.primary_score is not None for player in scored):
        components = score_components(scored)
        lines.append(
            f"  Primary/secondary correlation: {components.correlation:.3f}, "
            f"secondary impact {components.secondary_impact * 100:.1f}% rank change"
        )
    return "\n".join(lines) + "\n"


def _print_error(exc: Exception) -> None:
    print(f"Error: {exc}", file=sys.stderr)
    if isinstance(exc, InvalidPlayerDataError):
        for row in exc.rows:
            print(f"  {row}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    weights = None
    robust = args.robust
    max_iterations = args.max_iterations
    try:
        if args.load_profile:
            profile = WeightsProfile.load(args.load_profile)
            weights = profile.to_weights()
            robust = robust or profile.robust
            if max_iterations is None:
                max_iterations = profile.max_iterations
    except (OSError, ValueError, TypeError, KeyError) as exc:
        print(f"Error: invalid profile {args.load_profile}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        if args.seed is not None:
            validate_seed(args.seed)
        players = clean_players(load_players_csv(args.players))
        validate_players(players)
        validate_team_constraints(len(players), args.teams)
        scored = score_players(players, weights, robust=robust)
        result = assign_teams(
            scored,
            args.teams,
            seed=args.seed,
            optimize=not args.no_optimize,
            max_iterations=max_iterations,
        )
    except (TeamBalanceError, OSError) as exc:
        _print_error(exc)
        raise SystemExit(1) from exc

    if args.save_profile:
        WeightsProfile.from_weights(
            resolve_weights(players, weights),
            robust=robust,
            max_iterations=max_iterations,
        ).save(args.save_profile)
        print(f"Saved weights profile to {args.save_profile}", file=sys.stderr)

    if args.csv:
        output = format_csv(result)
    elif args.simple:
        output = format_simple(result)
    else:
        output = format_summary(result) + "\n" + format_team_table(result.teams) + "\n" + format_changes(result)
        if args.stats:
            output += "\n" + _format_stats(result, scored)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {result.total_players} assignments to {args.output}")
    else:
        sys.stdout.write(output)


if __name__ == "__main__":
    main()
