from __future__ import annotations

import logging
from typing import List, Optional

import pytest

from weatherproxy.core.abstractions import (
    Condition,
    Coordinates,
    CurrentConditions,
    LocationQuery,
    UVIndex,
    UVUnavailable,
    WeatherProvider,
)
from weatherproxy.core.config import WeatherLookupConfig
from weatherproxy.core.errors import ConfigurationError, InvalidRequest, LocationNotFound, UpstreamFailure
from weatherproxy.core.providers.base import LocationNotFoundError, ProviderError
from weatherproxy.core.providers.openweather import OpenWeatherProvider
from weatherproxy.core.services.weather_service import WeatherLookupService, parse_location_query


RESOLVED = Coordinates(latitude=6.93, longitude=79.85)


def make_conditions(coordinates: Optional[Coordinates] = RESOLVED) -> CurrentConditions:
    return CurrentConditions(
        name="Colombo",
        temperature_c=28.3,
        humidity_pct=70,
        wind_speed_ms=2.1,
        conditions=(Condition(main="Clouds", description="broken clouds"),),
        coordinates=coordinates,
    )


class _DummyProvider(WeatherProvider):
    name = "dummy"

    def __init__(self, uv: float = 5.6, coordinates: Optional[Coordinates] = RESOLVED) -> None:
        self.uv = uv
        self.coordinates = coordinates
        self.queries: List[LocationQuery] = []
        self.uv_calls: List[Coordinates] = []

    def current_conditions(self, query: LocationQuery) -> CurrentConditions:
        self.queries.append(query)
        return make_conditions(self.coordinates)

    def uv_index(self, coordinates: Coordinates) -> float:
        self.uv_calls.append(coordinates)
        return self.uv


class _FailingUVProvider(_DummyProvider):
    def uv_index(self, coordinates: Coordinates) -> float:
        raise ProviderError("HTTP 503")


class _FailingProvider(_DummyProvider):
    def __init__(self, error: ProviderError) -> None:
        super().__init__()
        self.error = error

    def current_conditions(self, query: LocationQuery) -> CurrentConditions:
        raise self.error


def test_parse_query_by_place() -> None:
    query = parse_location_query({"city": " Colombo,LK "})

    assert query == LocationQuery(place="Colombo,LK")
    assert not query.by_coordinates


def test_parse_query_coordinates_take_precedence() -> None:
    query = parse_location_query({"city": "Colombo", "lat": "6.9", "lon": "79.8"})

    assert query.by_coordinates
    assert query.coordinates == Coordinates(latitude=6.9, longitude=79.8)
    assert query.place is None


def test_parse_query_incomplete_pair_falls_back_to_place() -> None:
    query = parse_location_query({"city": "Colombo", "lat": "6.9"})

    assert query == LocationQuery(place="Colombo")


@pytest.mark.parametrize(
    "params",
    [{}, {"city": ""}, {"city": "   "}, {"lat": "6.9"}, {"lon": "79.8"}, {"lat": "", "lon": "79.8"}],
)
def test_parse_query_requires_place_or_pair(params) -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        parse_location_query(params)

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "City name or coordinates (lat, lon) are required"


def test_parse_query_rejects_non_numeric_pair() -> None:
    with pytest.raises(InvalidRequest, match="valid numbers"):
        parse_location_query({"lat": "north", "lon": "79.8"})


def test_lookup_assembles_report() -> None:
    service = WeatherLookupService(_DummyProvider(uv=5.6))

    report = service.lookup(LocationQuery(place="Colombo,LK"))

    assert report.uv == UVIndex(6)
    assert report.as_payload() == {
        "name": "Colombo",
        "main": {"temp": 28.3, "humidity": 70},
        "wind": {"speed": 2.1},
        "weather": [{"main": "Clouds", "description": "broken clouds"}],
        "uv": 6,
    }


def test_uv_lookup_uses_resolved_coordinates() -> None:
    provider = _DummyProvider()
    service = WeatherLookupService(provider)

    service.lookup(LocationQuery(coordinates=Coordinates(latitude=6.9, longitude=79.8)))

    assert provider.queries[0].coordinates == Coordinates(latitude=6.9, longitude=79.8)
    assert provider.uv_calls == [RESOLVED]


@pytest.mark.parametrize("reading, expected", [(5.6, 6), (5.4, 5), (5.5, 6), (0.0, 0), (11.49, 11)])
def test_uv_rounding(reading, expected) -> None:
    service = WeatherLookupService(_DummyProvider(uv=reading))

    report = service.lookup(LocationQuery(place="Colombo"))

    assert report.uv_index == expected


def test_uv_failure_is_absorbed(caplog) -> None:
    service = WeatherLookupService(_FailingUVProvider())

    with caplog.at_level(logging.WARNING):
        report = service.lookup(LocationQuery(place="Colombo"))

    assert isinstance(report.uv, UVUnavailable)
    assert report.uv_index is None
    assert report.as_payload()["uv"] is None
    assert report.name == "Colombo"
    assert "Failed to fetch UV index" in caplog.text


def test_uv_skipped_without_resolved_coordinates() -> None:
    provider = _DummyProvider(coordinates=None)
    service = WeatherLookupService(provider)

    report = service.lookup(LocationQuery(place="Colombo"))

    assert report.uv == UVUnavailable(reason="no coordinates")
    assert provider.uv_calls == []


def test_not_found_maps_to_location_not_found() -> None:
    service = WeatherLookupService(_FailingProvider(LocationNotFoundError("location not found")))

    with pytest.raises(LocationNotFound) as excinfo:
        service.lookup(LocationQuery(place="Atlantis"))

    assert excinfo.value.status_code == 404


def test_provider_error_maps_to_upstream_failure() -> None:
    service = WeatherLookupService(_FailingProvider(ProviderError("HTTP 500")))

    with pytest.raises(UpstreamFailure) as excinfo:
        service.lookup(LocationQuery(place="Colombo"))

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Failed to fetch weather data"
    assert isinstance(excinfo.value.__cause__, ProviderError)


def test_repeated_lookups_are_identical() -> None:
    service = WeatherLookupService(_DummyProvider())

    first = service.lookup(LocationQuery(place="Colombo"))
    second = service.lookup(LocationQuery(place="Colombo"))

    assert first == second


def test_from_config_requires_credential() -> None:
    with pytest.raises(ConfigurationError) as excinfo:
        WeatherLookupService.from_config(WeatherLookupConfig(api_key=None))

    assert excinfo.value.message == "Weather API key not configured"


def test_from_config_builds_openweather_provider() -> None:
    config = WeatherLookupConfig(api_key="abc", base_url="https://owm.test/", timeout=2.5)

    service = WeatherLookupService.from_config(config)

    provider = service._provider
    assert isinstance(provider, OpenWeatherProvider)
    assert provider.api_key == "abc"
    assert provider.base_url == "https://owm.test"
    assert provider.request_config.timeout == 2.5
