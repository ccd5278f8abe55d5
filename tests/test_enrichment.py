"""Tests for catch enrichment with location and weather."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import Mock

import requests

from fishbox.enrichment import enrich_catch_input
from fishbox.schemas import CatchInput, Coordinates, WeatherSnapshot

WEATHER = WeatherSnapshot(
    temperature=18,
    wind_speed=9,
    wind_direction=270,
    pressure=1012,
    humidity=60,
    description="Klar",
    icon="☀️",
)


def _located(**overrides: object) -> CatchInput:
    return CatchInput(
        species="Hecht", length=60, coordinates=Coordinates(lat=52.4, lng=13.6), **overrides
    )


class TestEnrichCatchInput:
    """Test filling in missing fields."""

    def test_fills_missing(self) -> None:
        weather = Mock(return_value=WEATHER)
        location = Mock(return_value="Dahme, Berlin")
        result = enrich_catch_input(_located(), weather, location)
        assert result.location == "Dahme, Berlin"
        assert result.weather == WEATHER
        lat, lng, when = weather.call_args.args
        assert (lat, lng) == (52.4, 13.6)
        assert isinstance(when, datetime)

    def test_without_coordinates(self) -> None:
        weather, location = Mock(), Mock()
        c = CatchInput(species="Hecht", length=60)
        assert enrich_catch_input(c, weather, location) is c
        weather.assert_not_called()
        location.assert_not_called()

    def test_keeps_user_values(self) -> None:
        weather, location = Mock(), Mock()
        c = _located(location="Mein Steg", weather=WEATHER)
        assert enrich_catch_input(c, weather, location) is c
        weather.assert_not_called()
        location.assert_not_called()

    def test_api_failure_leaves_fields_empty(self) -> None:
        weather = Mock(side_effect=requests.ConnectionError("offline"))
        location = Mock(side_effect=requests.Timeout("slow"))
        result = enrich_catch_input(_located(), weather, location)
        assert result.location is None
        assert result.weather is None

    def test_partial(self) -> None:
        result = enrich_catch_input(_located(), Mock(return_value=None), Mock(return_value="See"))
        assert result.location == "See"
        assert result.weather is None
