"""Species distribution and per-species size averages."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from fishbox.schemas import Catch


def species_distribution(catches: Iterable[Catch]) -> list[tuple[str, int]]:
    """Count catches per species.

    Returns ``(species, count)`` pairs sorted by count descending. Ties keep
    the order in which each species was first encountered.
    """
    counts = Counter(c.species for c in catches)
    # Counter preserves first-insertion order and sorted() is stable
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def average_length_by_species(
    catches: Iterable[Catch],
    limit: int | None = 8,
) -> list[tuple[str, float]]:
    """Mean length (cm) per species, largest first.

    Args:
        catches: Catch records.
        limit: Keep only the top ``limit`` species. None keeps all.
    """
    totals: dict[str, list[int]] = {}
    for c in catches:
        bucket = totals.setdefault(c.species, [0, 0])
        bucket[0] += c.length
        bucket[1] += 1

    averages = [(species, total / count) for species, (total, count) in totals.items()]
    averages.sort(key=lambda item: item[1], reverse=True)
    return averages if limit is None else averages[:limit]
