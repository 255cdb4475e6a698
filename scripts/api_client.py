"""Lightweight REST client for the frcpick API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def build_mapping(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid mapping JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the frcpick REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("teams", type=Path, nargs="?", help="Team statistics CSV")
    parser.add_argument("--event", default="", help="Event key for the pick list")
    parser.add_argument("--strategy", default="BALANCED", help="Preset strategy id")
    parser.add_argument("--min-matches", type=int, default=None, help="Minimum matches played")
    parser.add_argument("--mapping", default="", help="JSON mapping for team CSV columns")
    parser.add_argument("--list-strategies", action="store_true", help="List preset strategies and exit")
    parser.add_argument("--ratings", type=Path, metavar="MATCHES_JSON", help="Compute ratings from match JSON")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_strategies:
            resp = client.get("/strategies")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.ratings:
            matches = json.loads(args.ratings.read_text(encoding="utf-8"))
            resp = client.post("/ratings", json={"event_key": args.event, "matches": matches})
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.teams is None or not args.event:
            raise SystemExit("teams CSV and --event are required unless using --list-strategies/--ratings")

        files = {"teams": (args.teams.name, args.teams.read_bytes(), "text/csv")}
        data: dict[str, str] = {"event_key": args.event, "strategy": args.strategy}
        if args.min_matches is not None:
            data["min_matches"] = str(args.min_matches)
        mapping = build_mapping(args.mapping)
        if mapping:
            data["mapping"] = json.dumps(mapping)

        resp = client.post("/picklist/upload", files=files, data=data)
        resp.raise_for_status()
        payload = resp.json()
        for warning in payload["metadata"]["warnings"]:
            print(f"Warning: {warning}")
        for team in payload["teams"]:
            print(f"{team['rank']:>3}  {team['team_number']:>5}  {team['composite_score']:.4f}")


if __name__ == "__main__":
    main()
