"""Open-Meteo weather data source.

Captures the weather snapshot stored with a catch (free API, no key).

Public API:
  - snapshot: fetch_catch_weather, fetch_current_weather
  - client: API URL, WMO code lookup, wind direction labels
"""

from fishbox.datasources.weather.client import (
    OPEN_METEO_API,
    wind_direction_label,
    wmo_code_to_conditions,
)
from fishbox.datasources.weather.snapshot import fetch_catch_weather, fetch_current_weather

__all__ = [
    "OPEN_METEO_API",
    "fetch_catch_weather",
    "fetch_current_weather",
    "wind_direction_label",
    "wmo_code_to_conditions",
]
