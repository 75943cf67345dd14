"""Weather lookup service: current conditions enriched with a best-effort UV index."""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from weatherproxy.core.abstractions import (
    Coordinates,
    CurrentConditions,
    LocationQuery,
    UVIndex,
    UVLookup,
    UVUnavailable,
    WeatherProvider,
    WeatherReport,
)
from weatherproxy.core.config import WeatherLookupConfig
from weatherproxy.core.errors import ConfigurationError, InvalidRequest, LocationNotFound, UpstreamFailure
from weatherproxy.core.providers.base import LocationNotFoundError, ProviderError, RequestConfig
from weatherproxy.core.providers.openweather import OpenWeatherProvider


logger = logging.getLogger(__name__)


def parse_location_query(params: Mapping[str, Optional[str]]) -> LocationQuery:
    """Build a query from ``city`` / ``lat`` / ``lon`` request parameters.

    A complete coordinate pair takes precedence over a place name. Blank values
    count as missing.
    """
    city = (params.get("city") or "").strip()
    lat = (params.get("lat") or "").strip()
    lon = (params.get("lon") or "").strip()

    if lat and lon:
        try:
            coordinates = Coordinates(latitude=float(lat), longitude=float(lon))
        except ValueError as exc:
            raise InvalidRequest("lat and lon must be valid numbers") from exc
        return LocationQuery(coordinates=coordinates)
    if city:
        return LocationQuery(place=city)
    raise InvalidRequest()


class WeatherLookupService:
    """Fetch current conditions, then enrich them with the UV index.

    The UV lookup uses the coordinates the provider resolved, not the caller's
    input, so the two calls always run one after the other.
    """

    def __init__(self, provider: WeatherProvider) -> None:
        self._provider = provider

    @classmethod
    def from_config(cls, config: WeatherLookupConfig) -> "WeatherLookupService":
        if not config.has_credential:
            raise ConfigurationError()
        provider = OpenWeatherProvider(
            api_key=config.api_key,
            base_url=config.base_url,
            request_config=RequestConfig(timeout=config.timeout),
        )
        return cls(provider)

    def lookup(self, query: LocationQuery) -> WeatherReport:
        current = self.fetch_conditions(query)
        uv = self.fetch_uv_index(current.coordinates)
        return WeatherReport.assemble(current, uv)

    def fetch_conditions(self, query: LocationQuery) -> CurrentConditions:
        try:
            return self._provider.current_conditions(query)
        except LocationNotFoundError as exc:
            raise LocationNotFound() from exc
        except ProviderError as exc:
            logger.error("Weather provider %s failed: %s", self._provider.name, exc)
            raise UpstreamFailure() from exc

    def fetch_uv_index(self, coordinates: Optional[Coordinates]) -> UVLookup:
        if coordinates is None:
            logger.warning("Skipping UV index: provider returned no coordinates")
            return UVUnavailable(reason="no coordinates")
        try:
            reading = self._provider.uv_index(coordinates)
        except ProviderError as exc:
            logger.warning("Failed to fetch UV index: %s", exc)
            return UVUnavailable(reason=str(exc))
        return UVIndex.from_reading(reading)


__all__ = ["WeatherLookupService", "parse_location_query"]
