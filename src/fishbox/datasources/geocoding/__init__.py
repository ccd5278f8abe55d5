"""Reverse geocoding and coordinate helpers.

Public API:
  - nominatim: fetch_location_name, location_label
  - format_coordinates, distance_km (pure helpers)
"""

from __future__ import annotations

import math

from fishbox.datasources.geocoding.nominatim import fetch_location_name, location_label
from fishbox.schemas import Coordinates

EARTH_RADIUS_KM = 6371.0


def format_coordinates(coordinates: Coordinates) -> str:
    """Display form, e.g. ``52.520000°N, 13.405000°E``."""
    lat_dir = "N" if coordinates.lat >= 0 else "S"
    lng_dir = "E" if coordinates.lng >= 0 else "W"
    return f"{abs(coordinates.lat):.6f}°{lat_dir}, {abs(coordinates.lng):.6f}°{lng_dir}"


def distance_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance (haversine), rounded to two decimals."""
    d_lat = math.radians(b.lat - a.lat)
    d_lng = math.radians(b.lng - a.lng)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lng / 2) ** 2
    )
    return round(EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h)), 2)


__all__ = ["distance_km", "fetch_location_name", "format_coordinates", "location_label"]
