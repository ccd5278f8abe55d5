"""
Command-line interface for FishBox.

Prints derived views for an angler's catches and builds leaderboard
snapshots. Uses the backend configured via ``FISHBOX_*`` settings. Every
command except ``info`` needs a persistent one (``FISHBOX_BACKEND=postgrest``).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import Any
from zoneinfo import ZoneInfo

from fishbox import __version__
from fishbox.aggregation import (
    LeaderboardWindow,
    RankingMetric,
    SpotSortKey,
    build_leaderboard,
    cluster_spots,
    format_length,
    format_weight,
    hourly_counts,
    recent_months,
    species_distribution,
    summarize,
)
from fishbox.backends import build_backend, require_persistent_backend
from fishbox.config import get_settings
from fishbox.errors import FishBoxError
from fishbox.flows.leaderboard import build_leaderboards, snapshot_name, store
from fishbox.session import FishBoxSession
from fishbox.social import load_public_catches

# Commands that read catches; everything but ``info``.
NEEDS_BACKEND = frozenset({"stats", "spots", "leaderboard", "refresh"})


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="fishbox",
        description="Catch statistics, spots and leaderboards for anglers",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    stats_parser = subparsers.add_parser("stats", help="Show catch statistics for an angler")
    stats_parser.add_argument("--owner", required=True, help="User id of the angler")

    spots_parser = subparsers.add_parser("spots", help="List an angler's fishing spots")
    spots_parser.add_argument("--owner", required=True, help="User id of the angler")
    spots_parser.add_argument(
        "--sort",
        choices=[k.value for k in SpotSortKey],
        default=SpotSortKey.COUNT.value,
        help="Spot ordering (default: count)",
    )
    spots_parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Coordinate decimals used to merge spots (default: spot_precision setting)",
    )

    board_parser = subparsers.add_parser("leaderboard", help="Show the leaderboard")
    board_parser.add_argument(
        "--window",
        choices=[w.value for w in LeaderboardWindow],
        default=LeaderboardWindow.MONTH.value,
    )
    board_parser.add_argument(
        "--metric",
        choices=[m.value for m in RankingMetric],
        default=RankingMetric.CATCHES.value,
    )
    board_parser.add_argument("--user", default=None, help="Show this user's rank")
    board_parser.add_argument(
        "--live", action="store_true", help="Ignore snapshots and rank from the backend"
    )

    subparsers.add_parser("refresh", help="Rebuild all leaderboard snapshots")

    return parser


def _load_catches(owner_id: str) -> FishBoxSession:
    session = FishBoxSession.from_settings()
    asyncio.run(session.sign_in(owner_id))
    return session


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Backend: {settings.backend}")
    print(f"Debug: {settings.debug}")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle the 'stats' command."""
    settings = get_settings()
    tz = ZoneInfo(settings.timezone)
    catches = _load_catches(args.owner).store.catches
    if not catches:
        print("Noch keine Fänge.")
        return 0

    stats = summarize(catches)
    print(f"Fänge: {stats.total_catches} ({stats.recent_catches} in den letzten 7 Tagen)")
    print(f"Arten: {stats.unique_species}")
    print(f"Größter: {format_length(stats.biggest_catch)}")
    print(f"Ø Größe: {format_length(stats.average_length)}")
    print(f"Ø Gewicht: {format_weight(stats.average_weight)}")
    if stats.top_species:
        print(f"Top Art: {stats.top_species[0]} ({stats.top_species[1]}x)")
    if stats.top_bait:
        print(f"Top Köder: {stats.top_bait[0]} ({stats.top_bait[1]}x)")

    print("\nArtenverteilung:")
    for species, count in species_distribution(catches):
        print(f"  {species:<20} {count}")

    print("\nFänge pro Monat:")
    for month, count in recent_months(catches, tz=tz).items():
        print(f"  {month}  {'#' * count}")

    best_hours = sorted(hourly_counts(catches, tz=tz).items(), key=lambda i: i[1], reverse=True)
    print("\nBeste Uhrzeiten:")
    for hour, count in best_hours[:3]:
        if count:
            print(f"  {hour:02d}:00  {count}")
    return 0


def cmd_spots(args: argparse.Namespace) -> int:
    """Handle the 'spots' command."""
    settings = get_settings()
    precision = args.precision if args.precision is not None else settings.spot_precision
    catches = _load_catches(args.owner).store.catches
    spots = cluster_spots(catches, precision=precision, sort_by=SpotSortKey(args.sort))
    if not spots:
        print("Keine Fänge mit GPS-Position.")
        return 0
    for spot in spots:
        lat, lng = spot.key
        print(
            f"{spot.label:<30} {lat:>10}, {lng:>10}  "
            f"{spot.catch_count} Fänge, {len(spot.species)} Arten, "
            f"zuletzt {spot.last_catch:%d.%m.%Y}"
        )
    return 0


def _format_entry(data: dict[str, Any], metric: RankingMetric) -> str:
    if metric == RankingMetric.WEIGHT:
        return format_weight(data["total_weight"])
    if metric == RankingMetric.SIZE:
        return format_length(data["biggest_catch"])
    if metric == RankingMetric.SPECIES:
        return f"{data['unique_species']} Arten"
    return f"{data['total_catches']} Fänge"


def cmd_leaderboard(args: argparse.Namespace) -> int:
    """Handle the 'leaderboard' command."""
    window = LeaderboardWindow(args.window)
    metric = RankingMetric(args.metric)
    name = snapshot_name(window, metric)

    rows: list[dict[str, Any]]
    if not args.live and store.is_fresh(name):
        rows = store.read(name) or []
    else:
        settings = get_settings()
        catches = asyncio.run(load_public_catches(build_backend(settings), window))
        entries = build_leaderboard(
            catches, metric, window, limit=settings.leaderboard_limit
        )
        rows = [e.to_dict() for e in entries]

    if not rows:
        print("Noch keine öffentlichen Fänge.")
    for position, row in enumerate(rows, start=1):
        print(f"#{position:<4} {row['owner_id']:<36} {_format_entry(row, metric)}")

    if args.user:
        rank = next(
            (i for i, row in enumerate(rows, start=1) if row["owner_id"] == args.user), 0
        )
        print(f"\nDein Rang: {rank}" if rank else "\nDein Rang: nicht platziert")
    return 0


def cmd_refresh(_args: argparse.Namespace) -> int:
    """Handle the 'refresh' command."""
    print("Building leaderboard snapshots...")
    result = build_leaderboards(force=True)
    for window, count in result.items():
        print(f"  {window}: {count} anglers")
    print("Done.")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "stats": cmd_stats,
        "spots": cmd_spots,
        "leaderboard": cmd_leaderboard,
        "refresh": cmd_refresh,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    if args.debug:
        print(f"Debug mode enabled. Settings: {get_settings()}")
    try:
        if args.command in NEEDS_BACKEND:
            require_persistent_backend(get_settings())
        return handler(args)
    except FishBoxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
