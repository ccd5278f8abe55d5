"""
Prefect flow for building leaderboard snapshots.

Fetches public catches for each leaderboard window, ranks them by every
metric, and writes one snapshot per (window, metric) pair. Windows whose
snapshots are all still fresh are skipped.

Run locally:
    python -m fishbox.flows.leaderboard

Run with Prefect dashboard:
    prefect server start &
    python -m fishbox.flows.leaderboard
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta
from pathlib import Path  # noqa: TC003 (runtime import)
from typing import Any

from prefect import flow, task

from fishbox.aggregation.leaderboard import (
    LeaderboardWindow,
    RankingMetric,
    build_leaderboard,
)
from fishbox.backends import build_backend, require_persistent_backend
from fishbox.backends.base import Backend  # noqa: TC001 (runtime import)
from fishbox.config import get_settings
from fishbox.schemas import Catch  # noqa: TC001 (runtime import)
from fishbox.snapshots import SnapshotStore
from fishbox.social import load_public_catches

# Snapshot store under the configured data directory
store = SnapshotStore(get_settings().data_dir / "snapshots")

SNAPSHOT_TTL = timedelta(minutes=15)


def snapshot_name(window: LeaderboardWindow, metric: RankingMetric) -> str:
    """Store name for one leaderboard, e.g. ``leaderboard/month/weight``."""
    return f"leaderboard/{window.value}/{metric.value}"


def make_backend() -> Backend:
    """Backend used by the flow (replaced in tests)."""
    settings = get_settings()
    require_persistent_backend(settings)
    return build_backend(settings)


@task(name="fetch-public-catches")
def fetch_public_catches(window: LeaderboardWindow, now: datetime) -> list[Catch]:
    """Load every public catch dated inside ``window``."""
    return asyncio.run(load_public_catches(make_backend(), window, now))


@task(name="rank-leaderboards")
def rank_leaderboards(
    catches: list[Catch],
    window: LeaderboardWindow,
    now: datetime,
    limit: int = 100,
) -> dict[str, list[dict[str, Any]]]:
    """Rank the same catches by every metric."""
    return {
        metric.value: [
            entry.to_dict() for entry in build_leaderboard(catches, metric, window, now, limit)
        ]
        for metric in RankingMetric
    }


@task(name="save-leaderboards")
def save_leaderboards(
    window: LeaderboardWindow,
    boards: dict[str, list[dict[str, Any]]],
    now: datetime,
) -> list[Path]:
    """Write one snapshot per metric."""
    return [
        store.write(
            snapshot_name(window, RankingMetric(metric)),
            entries,
            source=f"backend:{get_settings().backend}",
            valid_until=now + SNAPSHOT_TTL,
            window=window.value,
            metric=metric,
            computed_for=now.isoformat(),
        )
        for metric, entries in boards.items()
    ]


def is_window_fresh(window: LeaderboardWindow) -> bool:
    return all(store.is_fresh(snapshot_name(window, metric)) for metric in RankingMetric)


@flow(name="build-leaderboards", log_prints=True)
def build_leaderboards(
    windows: list[LeaderboardWindow] | None = None,
    *,
    force: bool = False,
) -> dict[str, int]:
    """
    Build leaderboard snapshots for the given windows (default: all).

    Returns:
        Mapping of window -> number of ranked anglers (by catch count).
    """
    settings = get_settings()
    now = datetime.now(UTC)
    results: dict[str, int] = {}

    for window in windows or list(LeaderboardWindow):
        if not force and is_window_fresh(window):
            print(f"Leaderboards for '{window}' are fresh, skipping.")
            cached = store.read(snapshot_name(window, RankingMetric.CATCHES)) or []
            results[window.value] = len(cached)
            continue

        print(f"Fetching public catches for '{window}'...")
        catches = fetch_public_catches(window, now)
        boards = rank_leaderboards(catches, window, now, settings.leaderboard_limit)
        paths = save_leaderboards(window, boards, now)
        print(f"Ranked {len(catches)} catches into {len(paths)} leaderboards.")
        results[window.value] = len(boards[RankingMetric.CATCHES.value])

    return results


if __name__ == "__main__":
    result = build_leaderboards()
    print(f"Flow complete: {result}")
