"""Group catches into fishing spots by quantized GPS position.

Near-duplicate fixes (same coordinates to ``precision`` decimal places)
collapse into one spot. Five decimals is roughly one metre.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from fishbox.schemas import Catch, Coordinates

DEFAULT_PRECISION = 5


class SpotSortKey(StrEnum):
    """Ordering for spot lists (all descending)."""

    COUNT = "count"
    SPECIES = "species"
    RECENT = "recent"


@dataclass
class Spot:
    """A cluster of catches sharing a quantized location."""

    key: tuple[float, float]
    coordinates: Coordinates
    location: str | None
    last_catch: datetime
    species: set[str] = field(default_factory=set)
    catches: list[Catch] = field(default_factory=list)

    @property
    def catch_count(self) -> int:
        return len(self.catches)

    @property
    def label(self) -> str:
        return self.location or "Unbekannt"


def spot_key(coordinates: Coordinates, precision: int = DEFAULT_PRECISION) -> tuple[float, float]:
    """Quantization key for a GPS fix."""
    return (round(coordinates.lat, precision), round(coordinates.lng, precision))


def cluster_spots(
    catches: Iterable[Catch],
    precision: int = DEFAULT_PRECISION,
    sort_by: SpotSortKey = SpotSortKey.COUNT,
) -> list[Spot]:
    """Group catches with coordinates into spots.

    Catches without coordinates are ignored. Each spot takes its displayed
    coordinates and location label from its first member.

    Args:
        catches: Catch records.
        precision: Decimal places kept when quantizing coordinates.
        sort_by: Spot ordering; ties keep first-encountered order.
    """
    spots: dict[tuple[float, float], Spot] = {}
    for c in catches:
        if c.coordinates is None:
            continue
        key = spot_key(c.coordinates, precision)
        spot = spots.get(key)
        if spot is None:
            spot = Spot(
                key=key,
                coordinates=c.coordinates,
                location=c.location,
                last_catch=c.date,
            )
            spots[key] = spot
        spot.catches.append(c)
        spot.species.add(c.species)
        spot.last_catch = max(spot.last_catch, c.date)

    result = list(spots.values())
    if sort_by == SpotSortKey.SPECIES:
        result.sort(key=lambda s: len(s.species), reverse=True)
    elif sort_by == SpotSortKey.RECENT:
        result.sort(key=lambda s: s.last_catch, reverse=True)
    else:
        result.sort(key=lambda s: s.catch_count, reverse=True)
    return result
