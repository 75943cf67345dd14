"""OpenWeather weather provider."""
from __future__ import annotations

import math
from typing import Any, Dict, Optional

import requests

from weatherproxy.core.abstractions import Condition, Coordinates, CurrentConditions, LocationQuery
from weatherproxy.core.config import DEFAULT_BASE_URL
from weatherproxy.core.providers.base import HTTPProvider, MalformedResponse, RequestConfig


class OpenWeatherProvider(HTTPProvider):
    """Integration with the OpenWeather current weather and UV index endpoints."""

    name = "openweather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        super().__init__(session=session, request_config=request_config)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def current_conditions(self, query: LocationQuery) -> CurrentConditions:  # noqa: D401
        """Return current conditions from OpenWeather."""
        params: Dict[str, Any] = {"appid": self.api_key, "units": "metric"}
        if query.coordinates is not None:
            params["lat"] = query.coordinates.latitude
            params["lon"] = query.coordinates.longitude
        else:
            params["q"] = query.place

        data = self._get_json(f"{self.base_url}/weather", params=params)
        try:
            return self._parse_conditions(data)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"unexpected weather payload: {exc!r}") from exc

    def uv_index(self, coordinates: Coordinates) -> float:
        params = {"lat": coordinates.latitude, "lon": coordinates.longitude, "appid": self.api_key}
        data = self._get_json(f"{self.base_url}/uvi", params=params)
        try:
            value = float(data["value"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"unexpected UV payload: {exc!r}") from exc
        if not math.isfinite(value):
            raise MalformedResponse(f"UV value is not finite: {value}")
        return value

    def _parse_conditions(self, data: Dict[str, Any]) -> CurrentConditions:
        main = data["main"]
        wind = data["wind"]
        conditions = tuple(self._parse_condition(item) for item in data["weather"])
        if not conditions:
            raise ValueError("weather list is empty")

        return CurrentConditions(
            name=str(data["name"]),
            temperature_c=self._number(main["temp"]),
            humidity_pct=self._number(main["humidity"]),
            wind_speed_ms=self._number(wind["speed"]),
            conditions=conditions,
            coordinates=self._parse_coordinates(data.get("coord")),
        )

    @staticmethod
    def _number(value: Any) -> float:
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"not a finite number: {value!r}")
        return number

    @staticmethod
    def _parse_condition(item: Dict[str, Any]) -> Condition:
        if not isinstance(item, dict):
            raise TypeError(f"condition is not an object: {item!r}")
        return Condition(
            main=str(item["main"]),
            description=str(item["description"]),
            id=item.get("id"),
            icon=item.get("icon"),
        )

    @staticmethod
    def _parse_coordinates(coord: Any) -> Optional[Coordinates]:
        # A missing or unusable coord block only costs the UV enrichment.
        if not isinstance(coord, dict):
            return None
        try:
            return Coordinates(latitude=float(coord["lat"]), longitude=float(coord["lon"]))
        except (KeyError, TypeError, ValueError):
            return None
