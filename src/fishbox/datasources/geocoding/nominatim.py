"""Reverse geocoding via OpenStreetMap Nominatim.

Usage policy: https://operations.osmfoundation.org/policies/nominatim/
(identifying User-Agent, at most one request per second).
"""

from __future__ import annotations

from typing import Any

from fishbox.services.http import session

NOMINATIM_REVERSE = "https://nominatim.openstreetmap.org/reverse"


def location_label(payload: dict[str, Any]) -> str | None:
    """Build a short place label from a Nominatim reverse response.

    Prefers ``"<water>, <town>"``; falls back to the county for the second
    part and to ``display_name`` when neither part is known.
    """
    address: dict[str, Any] = payload.get("address") or {}
    parts: list[str] = []

    water = address.get("water") or address.get("lake") or address.get("river")
    if water:
        parts.append(water)

    town = address.get("town") or address.get("city") or address.get("village")
    if town:
        parts.append(town)
    elif address.get("county"):
        parts.append(address["county"])

    if parts:
        return ", ".join(parts)
    display_name: str | None = payload.get("display_name")
    return display_name


def fetch_location_name(lat: float, lng: float) -> str | None:
    """
    Look up a human-readable place name for coordinates.

    Args:
        lat: Latitude.
        lng: Longitude.

    Returns:
        Place label, or None if Nominatim knows nothing about the point.
    """
    params: dict[str, Any] = {"format": "json", "lat": lat, "lon": lng, "zoom": 10}
    resp = session.get(NOMINATIM_REVERSE, params=params)
    resp.raise_for_status()
    payload: dict[str, Any] = resp.json()
    if "error" in payload:
        return None
    return location_label(payload)
