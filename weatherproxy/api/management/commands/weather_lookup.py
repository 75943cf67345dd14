"""Management command to look up weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from weatherproxy.core.config import WeatherLookupConfig
from weatherproxy.core.errors import WeatherLookupError
from weatherproxy.core.services.weather_service import WeatherLookupService, parse_location_query


class Command(BaseCommand):
    help = "Fetch the current weather report for a city or a coordinate pair"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, help="City name, e.g. 'Colombo,LK'")
        parser.add_argument("--lat", type=str, help="Latitude")
        parser.add_argument("--lon", type=str, help="Longitude")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        params = {key: options.get(key) for key in ("city", "lat", "lon")}
        try:
            query = parse_location_query(params)
            service = WeatherLookupService.from_config(WeatherLookupConfig.from_settings())
            report = service.lookup(query)
        except WeatherLookupError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(json.dumps(report.as_payload()))
