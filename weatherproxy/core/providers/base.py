from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Base provider error."""


class LocationNotFoundError(ProviderError):
    """Raised when the provider answers 404 for the requested location."""


class MalformedResponse(ProviderError):
    """Raised when a successful response body cannot be understood."""


@dataclass
class RequestConfig:
    # Outbound calls are never retried; free-tier quotas are tight.
    timeout: float = 5.0


class HTTPProvider:
    """Base class that applies timeouts and maps HTTP failures to provider errors."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()

    def _handle_response(self, response: Response) -> Response:
        if response.status_code == 404:
            logger.info("Provider returned 404: %s", response.text[:200])
            raise LocationNotFoundError("location not found")
        if response.status_code >= 400:
            logger.error("Provider returned %s: %s", response.status_code, response.text[:200])
            raise ProviderError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs: Any) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            logger.error("Request timed out", exc_info=exc)
            raise ProviderError("timeout") from exc
        except requests.RequestException as exc:
            logger.error("Request failed", exc_info=exc)
            raise ProviderError("request failed") from exc
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return self._handle_response(response)

    def _get_json(self, url: str, **kwargs: Any) -> Any:
        response = self._request("GET", url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse("response body is not JSON") from exc


__all__ = [
    "HTTPProvider",
    "ProviderError",
    "LocationNotFoundError",
    "MalformedResponse",
    "RequestConfig",
]
