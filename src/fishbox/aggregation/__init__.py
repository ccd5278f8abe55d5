"""Derived views over catch lists.

Every function here is pure and total: no I/O, no backend calls, and an
empty input gives an empty or zero result instead of an error. Validation
happens earlier, at the row boundary in ``backends/rows.py``.

Modules:
  - species: distribution by count, average size per species
  - spots: GPS clustering into fishing spots
  - leaderboard: per-angler totals over public catches, ranking
  - timeline: dense monthly and hour-of-day buckets
  - summary: headline statistics and display formatting

Adding a derived view
---------------------
1. Create ``aggregation/{name}.py`` with a pure function taking
   ``Iterable[Catch]`` and returning dataclasses, dicts or tuples.
2. Re-export it here and add tests in ``tests/test_{name}.py``.
"""

from fishbox.aggregation.leaderboard import (
    LeaderboardEntry,
    LeaderboardWindow,
    RankingMetric,
    build_leaderboard,
    user_rank,
    window_start,
)
from fishbox.aggregation.species import average_length_by_species, species_distribution
from fishbox.aggregation.spots import Spot, SpotSortKey, cluster_spots, spot_key
from fishbox.aggregation.summary import (
    SummaryStats,
    bait_ranking,
    format_length,
    format_weight,
    summarize,
)
from fishbox.aggregation.timeline import hourly_counts, monthly_counts, recent_months

__all__ = [
    "LeaderboardEntry",
    "LeaderboardWindow",
    "RankingMetric",
    "Spot",
    "SpotSortKey",
    "SummaryStats",
    "average_length_by_species",
    "bait_ranking",
    "build_leaderboard",
    "cluster_spots",
    "format_length",
    "format_weight",
    "hourly_counts",
    "monthly_counts",
    "recent_months",
    "species_distribution",
    "spot_key",
    "summarize",
    "user_rank",
    "window_start",
]
