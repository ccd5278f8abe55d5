"""Rank anglers by their public catches.

Only ``is_public`` catches inside the window count. The window boundary is
``now - N days`` and a catch dated exactly on the boundary is included.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

from fishbox.schemas import Catch

DEFAULT_LIMIT = 100


class LeaderboardWindow(StrEnum):
    """Time range bounding which catches count."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @property
    def days(self) -> int | None:
        return _WINDOW_DAYS[self]


_WINDOW_DAYS: dict[LeaderboardWindow, int | None] = {
    LeaderboardWindow.WEEK: 7,
    LeaderboardWindow.MONTH: 30,
    LeaderboardWindow.ALL: None,
}


class RankingMetric(StrEnum):
    """What the leaderboard is sorted by (descending)."""

    CATCHES = "catches"
    WEIGHT = "weight"
    SIZE = "size"
    SPECIES = "species"


@dataclass
class LeaderboardEntry:
    """Per-angler totals over the window."""

    owner_id: str
    total_catches: int = 0
    total_weight: int = 0
    biggest_catch: int = 0
    species: set[str] = field(default_factory=set)

    @property
    def unique_species(self) -> int:
        return len(self.species)

    def value(self, metric: RankingMetric) -> int:
        """The number this entry is ranked by."""
        if metric == RankingMetric.WEIGHT:
            return self.total_weight
        if metric == RankingMetric.SIZE:
            return self.biggest_catch
        if metric == RankingMetric.SPECIES:
            return self.unique_species
        return self.total_catches

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "total_catches": self.total_catches,
            "total_weight": self.total_weight,
            "biggest_catch": self.biggest_catch,
            "unique_species": self.unique_species,
        }


def window_start(window: LeaderboardWindow, now: datetime | None = None) -> datetime | None:
    """Earliest counted timestamp, or None for all time."""
    days = window.days
    if days is None:
        return None
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return now - timedelta(days=days)


def build_leaderboard(
    catches: Iterable[Catch],
    metric: RankingMetric = RankingMetric.CATCHES,
    window: LeaderboardWindow = LeaderboardWindow.ALL,
    now: datetime | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[LeaderboardEntry]:
    """Group public catches by owner and rank them.

    Missing weights count as 0. Ties keep the order in which each owner was
    first encountered.

    Args:
        catches: Catches from any number of owners.
        metric: Ranking metric.
        window: Time window relative to ``now``.
        now: Reference time (defaults to the current UTC time).
        limit: Maximum number of entries returned.
    """
    boundary = window_start(window, now)
    entries: dict[str, LeaderboardEntry] = {}
    for c in catches:
        if not c.is_public:
            continue
        if boundary is not None and c.date < boundary:
            continue
        entry = entries.get(c.owner_id)
        if entry is None:
            entry = entries[c.owner_id] = LeaderboardEntry(owner_id=c.owner_id)
        entry.total_catches += 1
        entry.total_weight += c.weight or 0
        entry.biggest_catch = max(entry.biggest_catch, c.length)
        entry.species.add(c.species)

    ranked = sorted(entries.values(), key=lambda e: e.value(metric), reverse=True)
    return ranked[:limit]


def user_rank(entries: list[LeaderboardEntry], owner_id: str | None) -> int:
    """1-based position of ``owner_id`` in a ranked list, 0 if unranked."""
    for position, entry in enumerate(entries, start=1):
        if entry.owner_id == owner_id:
            return position
    return 0
