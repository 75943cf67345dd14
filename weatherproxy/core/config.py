from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings


DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True)
class WeatherLookupConfig:
    """Settings the lookup needs, resolved once and passed in explicitly."""

    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_settings(cls) -> "WeatherLookupConfig":
        return cls(
            api_key=getattr(settings, "OPENWEATHER_API_KEY", None) or None,
            base_url=getattr(settings, "OPENWEATHER_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(getattr(settings, "OPENWEATHER_TIMEOUT", DEFAULT_TIMEOUT)),
        )


__all__ = ["WeatherLookupConfig", "DEFAULT_BASE_URL", "DEFAULT_TIMEOUT"]
