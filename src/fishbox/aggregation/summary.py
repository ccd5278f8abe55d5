"""Summary statistics for the dashboard and stats views.

Averages are plain floats; rounding and unit conversion are left to the
formatting helpers at the bottom of this module.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from fishbox.aggregation.species import species_distribution
from fishbox.schemas import Catch

RECENT_DAYS = 7


@dataclass(frozen=True)
class SummaryStats:
    """Headline numbers over a catch list. Empty input gives zeros and Nones."""

    total_catches: int = 0
    unique_species: int = 0
    biggest_catch: int = 0
    recent_catches: int = 0
    average_length: float | None = None
    average_weight: float | None = None
    top_species: tuple[str, int] | None = None
    top_bait: tuple[str, int] | None = None


def bait_ranking(catches: Iterable[Catch], limit: int | None = 5) -> list[tuple[str, int]]:
    """Catches per bait, most successful first. Catches without bait are skipped."""
    counts = Counter(c.bait for c in catches if c.bait)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked if limit is None else ranked[:limit]


def summarize(catches: Iterable[Catch], now: datetime | None = None) -> SummaryStats:
    """Compute headline statistics.

    ``average_weight`` only considers catches that have a weight; unweighed
    catches are left out of the denominator rather than counted as zero.
    ``recent_catches`` counts catches from the last seven days before ``now``.
    """
    items = list(catches)
    if not items:
        return SummaryStats()

    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    recent_boundary = now - timedelta(days=RECENT_DAYS)

    weights = [c.weight for c in items if c.weight is not None]
    distribution = species_distribution(items)
    baits = bait_ranking(items, limit=1)

    return SummaryStats(
        total_catches=len(items),
        unique_species=len(distribution),
        biggest_catch=max(c.length for c in items),
        recent_catches=sum(1 for c in items if c.date > recent_boundary),
        average_length=sum(c.length for c in items) / len(items),
        average_weight=sum(weights) / len(weights) if weights else None,
        top_species=distribution[0],
        top_bait=baits[0] if baits else None,
    )


# =============================================================================
# Formatting
# =============================================================================


def format_weight(grams: float | None) -> str:
    """``850 g`` below one kilogram, ``2.2 kg`` from 1000 g up, ``-`` if unknown."""
    if grams is None:
        return "-"
    if grams >= 1000:
        return f"{grams / 1000:.1f} kg"
    return f"{round(grams)} g"


def format_length(cm: float | None) -> str:
    if cm is None:
        return "-"
    return f"{round(cm)} cm"
