"""Open-Meteo API client constants and WMO code lookup.

API docs: https://open-meteo.com/en/docs
"""

from __future__ import annotations

OPEN_METEO_API = "https://api.open-meteo.com/v1/forecast"

# Variables requested for a weather snapshot (hourly and current share names)
SNAPSHOT_VARS = [
    "temperature_2m",
    "relative_humidity_2m",
    "pressure_msl",
    "wind_speed_10m",
    "wind_direction_10m",
    "weather_code",
]

# WMO Weather Interpretation Codes -> (description, icon)
WMO_CONDITIONS: dict[int, tuple[str, str]] = {
    0: ("Klar", "☀️"),
    1: ("Überwiegend klar", "\U0001f324️"),
    2: ("Teilweise bewölkt", "⛅"),
    3: ("Bewölkt", "☁️"),
    45: ("Nebel", "\U0001f32b️"),
    48: ("Nebel", "\U0001f32b️"),
    51: ("Nieselregen", "\U0001f326️"),
    53: ("Nieselregen", "\U0001f326️"),
    55: ("Nieselregen", "\U0001f326️"),
    56: ("Gefrierender Nieselregen", "\U0001f327️"),
    57: ("Gefrierender Nieselregen", "\U0001f327️"),
    61: ("Regen", "\U0001f327️"),
    63: ("Regen", "\U0001f327️"),
    65: ("Regen", "\U0001f327️"),
    66: ("Gefrierender Regen", "\U0001f327️"),
    67: ("Gefrierender Regen", "\U0001f327️"),
    71: ("Schneefall", "\U0001f328️"),
    73: ("Schneefall", "\U0001f328️"),
    75: ("Schneefall", "\U0001f328️"),
    77: ("Schneegriesel", "\U0001f328️"),
    80: ("Regenschauer", "\U0001f327️"),
    81: ("Regenschauer", "\U0001f327️"),
    82: ("Regenschauer", "\U0001f327️"),
    85: ("Schneeschauer", "\U0001f328️"),
    86: ("Schneeschauer", "\U0001f328️"),
    95: ("Gewitter", "⛈️"),
    96: ("Gewitter mit Hagel", "⛈️"),
    99: ("Gewitter mit Hagel", "⛈️"),
}

UNKNOWN_CONDITIONS = ("Unbekannt", "\U0001f321️")

_COMPASS = ["N", "NO", "O", "SO", "S", "SW", "W", "NW"]


def wmo_code_to_conditions(code: int | None) -> tuple[str, str]:
    """Convert a WMO weather code to ``(description, icon)``."""
    if code is None:
        return UNKNOWN_CONDITIONS
    return WMO_CONDITIONS.get(code, UNKNOWN_CONDITIONS)


def wind_direction_label(degrees: float) -> str:
    """Eight-point compass label (German abbreviations) for a wind bearing."""
    return _COMPASS[round((degrees % 360) / 45) % 8]
