"""Weather snapshots for a catch from the Open-Meteo forecast API.

The forecast endpoint also serves the recent past, so a catch logged today
or back-dated a few days resolves against hourly data for that date.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fishbox.datasources.weather.client import (
    OPEN_METEO_API,
    SNAPSHOT_VARS,
    wmo_code_to_conditions,
)
from fishbox.schemas import WeatherSnapshot
from fishbox.services.http import session


def snapshot_from_values(values: dict[str, Any]) -> WeatherSnapshot | None:
    """Build a snapshot from one time step of Open-Meteo variables.

    Returns None if any measurement is missing.
    """
    measurements = [values.get(name) for name in SNAPSHOT_VARS[:-1]]
    if any(m is None for m in measurements):
        return None
    description, icon = wmo_code_to_conditions(values.get("weather_code"))
    return WeatherSnapshot(
        temperature=round(values["temperature_2m"]),
        wind_speed=round(values["wind_speed_10m"]),
        wind_direction=round(values["wind_direction_10m"]),
        pressure=round(values["pressure_msl"]),
        humidity=round(values["relative_humidity_2m"]),
        description=description,
        icon=icon,
    )


def fetch_catch_weather(
    lat: float,
    lng: float,
    when: datetime | None = None,
) -> WeatherSnapshot | None:
    """
    Fetch the weather at a location for the hour of a catch.

    Args:
        lat: Latitude.
        lng: Longitude.
        when: Catch time (default: now). Matched to the hourly step with
            the same UTC hour.

    Returns:
        WeatherSnapshot, or None if the response has no matching hour.
    """
    when = (when or datetime.now(UTC)).astimezone(UTC)
    day = when.date().isoformat()
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lng,
        "hourly": ",".join(SNAPSHOT_VARS),
        "timezone": "UTC",
        "start_date": day,
        "end_date": day,
    }
    resp = session.get(OPEN_METEO_API, params=params)
    resp.raise_for_status()
    hourly: dict[str, list[Any]] = resp.json().get("hourly") or {}

    times = hourly.get("time") or []
    for i, stamp in enumerate(times):
        if datetime.fromisoformat(stamp).hour == when.hour:
            return snapshot_from_values(
                {name: (hourly.get(name) or [None] * len(times))[i] for name in SNAPSHOT_VARS}
            )
    return None


def fetch_current_weather(lat: float, lng: float) -> WeatherSnapshot | None:
    """Fetch current conditions at a location."""
    params: dict[str, Any] = {
        "latitude": lat,
        "longitude": lng,
        "current": ",".join(SNAPSHOT_VARS),
    }
    resp = session.get(OPEN_METEO_API, params=params)
    resp.raise_for_status()
    current = resp.json().get("current")
    if not current:
        return None
    return snapshot_from_values(current)
