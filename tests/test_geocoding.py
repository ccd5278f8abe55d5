"""Tests for reverse geocoding and coordinate helpers."""

from __future__ import annotations

from unittest.mock import Mock, patch

from fishbox.datasources.geocoding import (
    distance_km,
    fetch_location_name,
    format_coordinates,
    location_label,
)
from fishbox.schemas import Coordinates


class TestLocationLabel:
    """Test building place labels from Nominatim payloads."""

    def test_water_and_town(self) -> None:
        payload = {"address": {"lake": "Müggelsee", "city": "Berlin"}}
        assert location_label(payload) == "Müggelsee, Berlin"

    def test_county_fallback(self) -> None:
        payload = {"address": {"river": "Havel", "county": "Havelland"}}
        assert location_label(payload) == "Havel, Havelland"

    def test_display_name_fallback(self) -> None:
        payload = {"address": {}, "display_name": "Irgendwo"}
        assert location_label(payload) == "Irgendwo"

    def test_nothing(self) -> None:
        assert location_label({}) is None


class TestFetchLocationName:
    @patch("fishbox.datasources.geocoding.nominatim.session.get")
    def test_fetch(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.json.return_value = {"address": {"water": "Wannsee", "town": "Berlin"}}
        mock_get.return_value = resp
        assert fetch_location_name(52.43, 13.17) == "Wannsee, Berlin"
        params = mock_get.call_args.kwargs["params"]
        assert params["lat"] == 52.43
        assert params["lon"] == 13.17
        assert params["format"] == "json"

    @patch("fishbox.datasources.geocoding.nominatim.session.get")
    def test_unable_to_geocode(self, mock_get: Mock) -> None:
        resp = Mock()
        resp.json.return_value = {"error": "Unable to geocode"}
        mock_get.return_value = resp
        assert fetch_location_name(0, 0) is None


class TestCoordinateHelpers:
    def test_format(self) -> None:
        assert format_coordinates(Coordinates(lat=52.52, lng=13.405)) == (
            "52.520000°N, 13.405000°E"
        )

    def test_format_southern_western(self) -> None:
        assert format_coordinates(Coordinates(lat=-33.9, lng=-70.6)) == (
            "33.900000°S, 70.600000°W"
        )

    def test_distance(self) -> None:
        berlin = Coordinates(lat=52.52, lng=13.405)
        hamburg = Coordinates(lat=53.551, lng=9.994)
        assert 250 < distance_km(berlin, hamburg) < 260
        assert distance_km(berlin, berlin) == 0
