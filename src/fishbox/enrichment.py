"""Fill in location and weather for a catch about to be logged.

Both lookups are optional conveniences: a failing API leaves the field
empty and the catch is still logged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

import requests

from fishbox.datasources.geocoding import fetch_location_name
from fishbox.datasources.weather import fetch_catch_weather
from fishbox.schemas import CatchInput, WeatherSnapshot

logger = logging.getLogger(__name__)

WeatherLookup = Callable[[float, float, datetime], WeatherSnapshot | None]
LocationLookup = Callable[[float, float], str | None]


def enrich_catch_input(
    catch_input: CatchInput,
    weather_lookup: WeatherLookup = fetch_catch_weather,
    location_lookup: LocationLookup = fetch_location_name,
) -> CatchInput:
    """Return a copy with ``location`` and ``weather`` filled where missing.

    Nothing is looked up for catches without coordinates, and fields the
    user already set are never overwritten.
    """
    coords = catch_input.coordinates
    if coords is None:
        return catch_input

    updates: dict[str, object] = {}
    if catch_input.location is None:
        try:
            name = location_lookup(coords.lat, coords.lng)
        except requests.RequestException:
            logger.warning("Reverse geocoding failed for %s", coords, exc_info=True)
        else:
            if name:
                updates["location"] = name

    if catch_input.weather is None:
        try:
            weather = weather_lookup(coords.lat, coords.lng, catch_input.date)
        except requests.RequestException:
            logger.warning("Weather lookup failed for %s", coords, exc_info=True)
        else:
            if weather is not None:
                updates["weather"] = weather

    return catch_input.model_copy(update=updates) if updates else catch_input
