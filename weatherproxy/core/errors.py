"""Errors surfaced by the weather lookup to its callers."""
from __future__ import annotations


class WeatherLookupError(RuntimeError):
    """Base error carrying the HTTP status and message shown to the caller."""

    status_code = 500
    default_message = "Failed to fetch weather data"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(WeatherLookupError):
    status_code = 400
    default_message = "City name or coordinates (lat, lon) are required"


class ConfigurationError(WeatherLookupError):
    status_code = 500
    default_message = "Weather API key not configured"


class LocationNotFound(WeatherLookupError):
    status_code = 404
    default_message = "Location not found"


class UpstreamFailure(WeatherLookupError):
    status_code = 500
    default_message = "Failed to fetch weather data"


__all__ = [
    "WeatherLookupError",
    "InvalidRequest",
    "ConfigurationError",
    "LocationNotFound",
    "UpstreamFailure",
]
