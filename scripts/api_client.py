"""Lightweight REST client for the teambalance API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teambalance REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("players", type=Path, help="Players CSV")
    parser.add_argument("--teams", type=int, default=2, help="Number of teams to request")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible assignment")
    parser.add_argument("--no-optimize", action="store_true", help="Skip balance optimization")
    parser.add_argument("--robust", action="store_true", help="Use robust normalization")
    parser.add_argument("--preview-only", action="store_true", help="Fetch the data summary without assigning")
    parser.add_argument("--export-path", type=Path, help="Download assignments CSV to this path")
    args = parser.parse_args()

    def make_files() -> dict[str, tuple[str, bytes, str]]:
        return {"players": (args.players.name, args.players.read_bytes(), "text/csv")}

    with httpx.Client(base_url=args.base_url) as client:
        resp = client.post("/preview", files=make_files())
        resp.raise_for_status()
        print("Preview:", json.dumps(resp.json(), indent=2))

        if args.preview_only:
            return

        assignment_request = {
            "teams": args.teams,
            "seed": args.seed,
            "optimize": not args.no_optimize,
            "robust": args.robust,
        }
        data = {"assignment_request": json.dumps(assignment_request)}

        if args.export_path:
            resp = client.post("/assignments/export.csv", files=make_files(), data=data)
            if resp.status_code == 400:
                raise SystemExit(resp.json()["detail"])
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")
            return

        resp = client.post("/assignments", files=make_files(), data=data)
        if resp.status_code == 400:
            raise SystemExit(resp.json()["detail"])
        resp.raise_for_status()
        payload = resp.json()
        fairness = payload["fairness"]
        print(f"Seed used: {payload['seed']}")
        for team in payload["teams"]:
            print(f"Team {team['team_id']}: {team['size']} players, average {team['average_score']:.3f}")
        print(f"Grade: {fairness['grade']} ({fairness['justification']})")


if __name__ == "__main__":
    main()
