"""Tests for the Open-Meteo weather datasource."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import Mock, patch

from fishbox.datasources.weather import (
    fetch_catch_weather,
    fetch_current_weather,
    wind_direction_label,
    wmo_code_to_conditions,
)
from fishbox.datasources.weather.snapshot import snapshot_from_values

VALUES = {
    "temperature_2m": 14.6,
    "relative_humidity_2m": 71,
    "pressure_msl": 1015.8,
    "wind_speed_10m": 11.4,
    "wind_direction_10m": 232,
    "weather_code": 3,
}


def _hourly_response() -> Mock:
    hours = [f"2024-06-01T{h:02d}:00" for h in range(24)]
    hourly: dict[str, list[float | int | str | None]] = {"time": list(hours)}
    for name, value in VALUES.items():
        hourly[name] = [value] * 24
    hourly["temperature_2m"] = [float(h) for h in range(24)]
    resp = Mock()
    resp.json.return_value = {"hourly": hourly}
    resp.raise_for_status = Mock()
    return resp


class TestConditions:
    def test_known_code(self) -> None:
        assert wmo_code_to_conditions(3) == ("Bewölkt", "☁️")

    def test_unknown_code(self) -> None:
        assert wmo_code_to_conditions(42)[0] == "Unbekannt"
        assert wmo_code_to_conditions(None)[0] == "Unbekannt"

    def test_wind_direction(self) -> None:
        assert wind_direction_label(0) == "N"
        assert wind_direction_label(90) == "O"
        assert wind_direction_label(232) == "SW"
        assert wind_direction_label(350) == "N"


class TestSnapshotFromValues:
    def test_rounds(self) -> None:
        snap = snapshot_from_values(VALUES)
        assert snap is not None
        assert snap.temperature == 15
        assert snap.pressure == 1016
        assert snap.wind_speed == 11
        assert snap.description == "Bewölkt"

    def test_missing_measurement(self) -> None:
        assert snapshot_from_values({**VALUES, "pressure_msl": None}) is None


class TestFetchCatchWeather:
    """Test hourly lookup for a catch."""

    @patch("fishbox.datasources.weather.snapshot.session.get")
    def test_matches_hour(self, mock_get: Mock) -> None:
        mock_get.return_value = _hourly_response()
        snap = fetch_catch_weather(52.5, 13.4, datetime(2024, 6, 1, 7, 45, tzinfo=UTC))
        assert snap is not None
        assert snap.temperature == 7
        params = mock_get.call_args.kwargs["params"]
        assert params["latitude"] == 52.5
        assert params["start_date"] == "2024-06-01"
        assert params["end_date"] == "2024-06-01"
        assert "pressure_msl" in params["hourly"]

    @patch("fishbox.datasources.weather.snapshot.session.get")
    def test_no_data(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.json.return_value = {}
        mock_get.return_value = resp
        assert fetch_catch_weather(52.5, 13.4, datetime(2024, 6, 1, tzinfo=UTC)) is None


class TestFetchCurrentWeather:
    @patch("fishbox.datasources.weather.snapshot.session.get")
    def test_current_block(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.json.return_value = {"current": VALUES}
        mock_get.return_value = resp
        snap = fetch_current_weather(52.5, 13.4)
        assert snap is not None
        assert snap.humidity == 71
        assert "current" in mock_get.call_args.kwargs["params"]
