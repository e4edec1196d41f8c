"""Command-line interface for serving the dashboard and exporting player tables."""

from __future__ import annotations

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

import uvicorn

from fplboard.api import create_app
from fplboard.config import STAT_FIELDS, Settings, get_stat_field
from fplboard.config_loader import FilterProfile
from fplboard.store import DataStore
from fplboard.table import derive_rows, export_rows_to_csv
from fplboard.table.filtering import bound_param
from fplboard.upstream import UpstreamClient, UpstreamError


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fantasy Premier League player dashboard")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the web dashboard")
    serve.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    serve.add_argument("--port", type=int, default=8000, help="Port to listen on")
    serve.add_argument("--log-level", default="info", help="uvicorn log level")

    table = subparsers.add_parser("table", help="Write the filtered player table as CSV")
    table.add_argument("--search", default=None, help="Case-insensitive name substring")
    table.add_argument("--team", default=None, help="Team id to keep")
    table.add_argument("--position", default=None, help="Position id to keep (1-4)")
    table.add_argument(
        "--bound",
        action="append",
        default=[],
        help="Stat bound as KEY=VALUE (e.g., now_cost_min=6)",
    )
    table.add_argument("--sort", default=None, help="Stat field to sort by")
    table.add_argument("--desc", action="store_true", help="Sort descending")
    table.add_argument("--output", type=Path, default=None, help="Output CSV path (stdout if omitted)")
    table.add_argument("--load-profile", type=Path, help="Load filter profile JSON", default=None)
    table.add_argument("--save-profile", type=Path, help="Save filter profile JSON", default=None)
    return parser.parse_args(argv)


_KNOWN_BOUNDS = {bound_param(stat.key, side) for stat in STAT_FIELDS for side in ("min", "max")}


def _check_bound_key(key: str) -> str:
    if key not in _KNOWN_BOUNDS:
        raise ValueError(f"Unknown bound '{key}'")
    return key


def _parse_bounds(entries: list[str]) -> dict[str, str]:
    bounds: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid bound entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        bounds[_check_bound_key(key.strip())] = value.strip()
    return bounds


def _check_profile(profile: FilterProfile) -> FilterProfile:
    """Normalise a profile loaded from JSON; numbers become the text the table expects."""

    if not isinstance(profile.bounds, dict):
        raise ValueError("Profile bounds must be an object of key/value pairs")
    bounds = {}
    for key, value in profile.bounds.items():
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise ValueError(f"Bound '{key}' must be a number, got {value!r}")
        bounds[_check_bound_key(key)] = str(value).strip()
    if profile.sort_key:
        get_stat_field(profile.sort_key)
    return replace(
        profile,
        search=str(profile.search or ""),
        team=str(profile.team or ""),
        position=str(profile.position or ""),
        bounds=bounds,
    )


def _build_profile(args: argparse.Namespace) -> FilterProfile:
    profile = FilterProfile.load(args.load_profile) if args.load_profile else FilterProfile()
    profile = _check_profile(profile)
    if args.search is not None:
        profile = replace(profile, search=args.search)
    if args.team is not None:
        profile = replace(profile, team=args.team)
    if args.position is not None:
        profile = replace(profile, position=args.position)
    if args.bound:
        profile = replace(profile, bounds=profile.bounds | _parse_bounds(args.bound))
    if args.sort is not None:
        get_stat_field(args.sort)
        profile = replace(profile, sort_key=args.sort, sort_direction="desc" if args.desc else "asc")
    return profile


async def _fetch_table(settings: Settings, profile: FilterProfile) -> str:
    store = DataStore(UpstreamClient.from_settings(settings))
    await store.load_bootstrap()
    rows = derive_rows(store.players, store.teams, profile.criteria(), profile.sort())
    return export_rows_to_csv(rows)


def _run_table(args: argparse.Namespace) -> None:
    try:
        profile = _build_profile(args)
    except (KeyError, OSError, ValueError) as exc:
        raise SystemExit(str(exc)) from exc

    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved filter profile to {args.save_profile}", file=sys.stderr)

    try:
        csv_text = asyncio.run(_fetch_table(Settings.from_env(), profile))
    except UpstreamError as exc:
        raise SystemExit(f"Unable to load player data: {exc}") from exc

    if args.output:
        args.output.write_text(csv_text, encoding="utf-8")
        row_count = max(len(csv_text.splitlines()) - 1, 0)
        print(f"Wrote {row_count} players to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(csv_text)


def _run_serve(args: argparse.Namespace) -> None:
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=args.log_level)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    if args.command == "serve":
        _run_serve(args)
    else:
        _run_table(args)


if __name__ == "__main__":
    main()
