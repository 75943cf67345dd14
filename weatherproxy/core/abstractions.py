"""Core abstractions for the weather lookup domain."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class LocationQuery:
    """A place name or a coordinate pair; coordinates win when both are set."""

    place: Optional[str] = None
    coordinates: Optional[Coordinates] = None

    @property
    def by_coordinates(self) -> bool:
        return self.coordinates is not None


@dataclass(frozen=True)
class Condition:
    """One upstream condition descriptor, e.g. ``Clouds`` / ``broken clouds``."""

    main: str
    description: str
    id: Optional[int] = None
    icon: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.id is not None:
            payload["id"] = self.id
        payload["main"] = self.main
        payload["description"] = self.description
        if self.icon is not None:
            payload["icon"] = self.icon
        return payload


@dataclass(frozen=True)
class CurrentConditions:
    """Current weather as returned by the provider.

    ``coordinates`` are the ones the provider resolved the location to. They
    are the only coordinates the UV lookup is allowed to use.
    """

    name: str
    temperature_c: float
    humidity_pct: float
    wind_speed_ms: float
    conditions: Tuple[Condition, ...]
    coordinates: Optional[Coordinates]


@dataclass(frozen=True)
class UVIndex:
    value: int

    @classmethod
    def from_reading(cls, reading: float) -> "UVIndex":
        """Round half away from zero: 4.5 becomes 5, not 4 as round() would give."""
        rounded = Decimal(str(reading)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(value=int(rounded))


@dataclass(frozen=True)
class UVUnavailable:
    reason: str


UVLookup = Union[UVIndex, UVUnavailable]


@dataclass(frozen=True)
class WeatherReport:
    """Normalized report returned to API callers."""

    name: str
    temperature_c: float
    humidity_pct: float
    wind_speed_ms: float
    conditions: Tuple[Condition, ...]
    uv: UVLookup

    @classmethod
    def assemble(cls, current: CurrentConditions, uv: UVLookup) -> "WeatherReport":
        return cls(
            name=current.name,
            temperature_c=current.temperature_c,
            humidity_pct=current.humidity_pct,
            wind_speed_ms=current.wind_speed_ms,
            conditions=current.conditions,
            uv=uv,
        )

    @property
    def uv_index(self) -> Optional[int]:
        if isinstance(self.uv, UVIndex):
            return self.uv.value
        return None

    def as_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "main": {"temp": self.temperature_c, "humidity": self.humidity_pct},
            "wind": {"speed": self.wind_speed_ms},
            "weather": [condition.as_dict() for condition in self.conditions],
            "uv": self.uv_index,
        }


class WeatherProvider(Protocol):
    """A data source for current conditions and UV readings."""

    name: str

    def current_conditions(self, query: LocationQuery) -> CurrentConditions:
        """Fetch current conditions for a place name or coordinate pair."""
        ...

    def uv_index(self, coordinates: Coordinates) -> float:
        """Fetch the raw UV reading for the provided coordinates."""
        ...
