"""Common freshwater species with minimum sizes and closed seasons.

The species field of a catch is free text; this list only feeds suggestions
and the legal-size / closed-season hints. Values follow typical German
state regulations and vary by region.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SpeciesInfo:
    name: str
    scientific_name: str
    min_size_cm: int | None = None
    # (month, day) inclusive
    closed_season: tuple[tuple[int, int], tuple[int, int]] | None = None


SPECIES: dict[str, SpeciesInfo] = {
    "Hecht": SpeciesInfo("Hecht", "Esox lucius", 45, ((2, 15), (4, 30))),
    "Zander": SpeciesInfo("Zander", "Sander lucioperca", 45, ((2, 15), (5, 31))),
    "Barsch": SpeciesInfo("Barsch", "Perca fluviatilis"),
    "Karpfen": SpeciesInfo("Karpfen", "Cyprinus carpio"),
    "Forelle": SpeciesInfo("Forelle", "Salmo trutta", 25),
    "Aal": SpeciesInfo("Aal", "Anguilla anguilla", 35),
    "Wels": SpeciesInfo("Wels", "Silurus glanis"),
    "Döbel": SpeciesInfo("Döbel", "Squalius cephalus"),
}


def suggested_species() -> list[str]:
    """Species names offered as suggestions when logging a catch."""
    return list(SPECIES)


def is_undersized(species: str, length: int) -> bool:
    """True if ``length`` is below the species' minimum size."""
    info = SPECIES.get(species)
    return bool(info and info.min_size_cm is not None and length < info.min_size_cm)


def in_closed_season(species: str, on: date) -> bool:
    """True if ``on`` falls into the species' closed season."""
    info = SPECIES.get(species)
    if info is None or info.closed_season is None:
        return False
    start, end = info.closed_season
    day = (on.month, on.day)
    if start <= end:
        return start <= day <= end
    # Season wraps the year boundary
    return day >= start or day <= end
