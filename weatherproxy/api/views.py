"""REST API views for weather information."""
from __future__ import annotations

import logging
from typing import Optional

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weatherproxy.core.config import WeatherLookupConfig
from weatherproxy.core.errors import WeatherLookupError
from weatherproxy.core.services.weather_service import WeatherLookupService, parse_location_query


logger = logging.getLogger(__name__)


class WeatherView(APIView):
    """Provide a normalized weather report for a city or a coordinate pair."""

    permission_classes = [AllowAny]
    config: Optional[WeatherLookupConfig] = None

    def get_config(self) -> WeatherLookupConfig:
        return self.config or WeatherLookupConfig.from_settings()

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather report for the requested location."""
        try:
            query = parse_location_query(request.query_params)
            service = WeatherLookupService.from_config(self.get_config())
            report = service.lookup(query)
        except WeatherLookupError as exc:
            logger.info("Weather lookup rejected (%s): %s", exc.status_code, exc.message)
            return Response({"error": exc.message}, status=exc.status_code)

        return Response(report.as_payload(), status=status.HTTP_200_OK)
