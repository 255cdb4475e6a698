"""Command-line interface for building pick lists and ratings."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import uvicorn

from frcpick.config import iter_strategies
from frcpick.config_loader import WeightProfile
from frcpick.export import export_pick_list_to_csv
from frcpick.ingest import load_matches_json, load_team_metrics_csv
from frcpick.ranking import generate_pick_list
from frcpick.ratings import (
    build_team_metrics,
    calculate_all_component_oprs,
    calculate_ccwm,
    calculate_event_ratings,
)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build FRC alliance-selection pick lists")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    sub = parser.add_subparsers(dest="command", required=True)

    rank = sub.add_parser("rank", help="Rank teams and write a pick-list CSV")
    source = rank.add_mutually_exclusive_group(required=True)
    source.add_argument("--teams", type=Path, help="Team statistics CSV")
    source.add_argument("--matches", type=Path, help="Match results JSON (ratings computed)")
    rank.add_argument("--event", required=True, help="Event key (e.g., 2025cafr)")
    rank.add_argument("--event-name", default=None, help="Display name for the export header")
    rank.add_argument("--strategy", default="BALANCED", help="Preset strategy id")
    rank.add_argument("--weights-file", type=Path, default=None, help="Custom weight profile JSON")
    rank.add_argument("--save-weights", type=Path, default=None, help="Write the weights used to JSON")
    rank.add_argument("--min-matches", type=int, default=None, help="Minimum matches played")
    rank.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for team CSV columns (e.g., opr=OPR)",
    )
    rank.add_argument("--output", type=Path, default=Path("picklist.csv"), help="Output CSV path")

    ratings = sub.add_parser("ratings", help="Compute OPR/DPR/CCWM and component OPR")
    ratings.add_argument("matches", type=Path, help="Match results JSON")
    ratings.add_argument("--event", required=True, help="Event key")
    ratings.add_argument("--output", type=Path, default=None, help="Write JSON here instead of stdout")

    sub.add_parser("strategies", help="List preset strategies")

    serve = sub.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser


def _run_rank(args: argparse.Namespace) -> None:
    profile = WeightProfile.load(args.weights_file) if args.weights_file else None
    min_matches = args.min_matches
    if min_matches is None and profile is not None:
        min_matches = profile.min_matches

    if args.teams:
        teams, report = load_team_metrics_csv(args.teams, mapping=_parse_mapping(args.column) or None)
        print(f"Loaded {report.loaded}/{report.total_rows} team rows")
        for skipped in report.skipped_rows[:5]:
            print(f"Skipped {skipped}")
    else:
        teams = build_team_metrics(args.event, load_matches_json(args.matches))
        print(f"Computed ratings for {len(teams)} teams")

    result = generate_pick_list(
        args.event,
        teams,
        strategy_id=None if profile else args.strategy,
        weights=profile.weights if profile else None,
        min_matches=min_matches,
        event_name=args.event_name,
    )

    if args.save_weights:
        WeightProfile(result.strategy.weights, name=result.strategy.name, min_matches=min_matches).save(
            args.save_weights
        )
        print(f"Saved weight profile to {args.save_weights}")

    args.output.write_text(export_pick_list_to_csv(result), encoding="utf-8")
    print(f"Ranked {len(result.teams)} of {result.total_teams} teams -> {args.output}")
    for warning in result.metadata.warnings:
        print(f"Warning: {warning}")


def _run_ratings(args: argparse.Namespace) -> None:
    matches = load_matches_json(args.matches)
    event = calculate_event_ratings(args.event, matches)
    completed = [match for match in matches if match.is_complete]
    components = calculate_all_component_oprs(args.event, completed)
    payload = {
        "event_key": args.event,
        "total_matches": event.opr.total_matches,
        "teams": [asdict(entry) for entry in calculate_ccwm(event.opr, event.dpr)],
        "components": {
            name: {str(team): value for team, value in values.items()}
            for name, values in components.values.items()
        },
        "component_failures": components.failures,
        "warnings": event.warnings,
    }
    text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(text, encoding="utf-8")
        print(f"Wrote ratings to {args.output}")
    else:
        print(text)


def main(argv: Sequence[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.command == "rank":
        _run_rank(args)
    elif args.command == "ratings":
        _run_ratings(args)
    elif args.command == "serve":
        uvicorn.run("frcpick.api:create_app", factory=True, host=args.host, port=args.port)
    else:
        for strategy in iter_strategies():
            print(f"{strategy.id:<10} {strategy.name:<10} {strategy.description}")


if __name__ == "__main__":
    main()
