from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Location:
    """Where to ask the provider about.

    Exactly one form is expected: coordinates, a free-text place query
    (``"Providence,US"``) or a postal code (``"02903,US"``).
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    query: Optional[str] = None
    zip_code: Optional[str] = None

    @classmethod
    def at(cls, latitude: float, longitude: float) -> "Location":
        return cls(latitude=latitude, longitude=longitude)

    @classmethod
    def named(cls, query: str) -> "Location":
        return cls(query=query)

    @classmethod
    def postal(cls, zip_code: str) -> "Location":
        return cls(zip_code=zip_code)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def as_params(self) -> Dict[str, object]:
        if self.has_coordinates:
            return {"lat": self.latitude, "lon": self.longitude}
        if self.query:
            return {"q": self.query}
        if self.zip_code:
            return {"zip": self.zip_code}
        raise ValueError("location needs coordinates, a query or a zip code")


@dataclass(frozen=True)
class CurrentConditions:
    """Current conditions in imperial units, flattened for the UI.

    Temperature, humidity, pressure and wind speed are always present; every
    other field is ``None`` when the provider left it out.
    """

    name: Optional[str]
    country: Optional[str]
    temp_f: float
    humidity: float
    pressure_hpa: float
    wind_mph: float
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    feels_like_f: Optional[float] = None
    temp_min_f: Optional[float] = None
    temp_max_f: Optional[float] = None
    condition: Optional[str] = None
    description: str = "—"
    icon: Optional[str] = None
    wind_gust_mph: Optional[float] = None
    wind_deg: Optional[float] = None
    visibility_mi: Optional[float] = None
    sunrise: Optional[int] = None
    sunset: Optional[int] = None
    sunrise_local: Optional[str] = None
    sunset_local: Optional[str] = None
    timezone_offset: Optional[int] = None
    rain_1h_mm: Optional[float] = None
    rain_3h_mm: Optional[float] = None
    snow_1h_mm: Optional[float] = None
    snow_3h_mm: Optional[float] = None
    cloud_pct: Optional[float] = None
    dew_point_f: Optional[float] = None


@dataclass(frozen=True)
class ForecastBlock:
    """One 3-hour forecast sample."""

    dt: int
    dt_txt: Optional[str] = None
    temp_f: Optional[float] = None
    temp_min_f: Optional[float] = None
    temp_max_f: Optional[float] = None
    icon: Optional[str] = None
    condition: Optional[str] = None
    description: Optional[str] = None
    wind_mph: Optional[float] = None
    wind_deg: Optional[float] = None
    cloud_pct: Optional[float] = None
    pop: Optional[float] = None
    rain_3h_mm: Optional[float] = None
    snow_3h_mm: Optional[float] = None


@dataclass(frozen=True)
class City:
    name: Optional[str]
    country: Optional[str]
    coord: Optional[Dict[str, float]]
    timezone: Optional[int]


@dataclass(frozen=True)
class ForecastSeries:
    """Chronological forecast blocks plus the city they belong to."""

    city: Optional[City]
    blocks: Tuple[ForecastBlock, ...] = field(default_factory=tuple)

    @property
    def timezone_offset(self) -> int:
        if self.city is None or self.city.timezone is None:
            return 0
        return self.city.timezone

    @property
    def coord(self) -> Optional[Dict[str, float]]:
        if self.city is None:
            return None
        return self.city.coord


@dataclass(frozen=True)
class DailyBar:
    """Min/max summary of one local calendar day."""

    key: str
    min_f: Optional[float]
    max_f: Optional[float]
    icon: Optional[str]


@dataclass(frozen=True)
class StormReadings:
    """The subset of current conditions the storm scorer looks at."""

    pressure_hpa: Optional[float] = None
    wind_mph: Optional[float] = None
    wind_gust_mph: Optional[float] = None
    visibility_mi: Optional[float] = None
    cloud_pct: Optional[float] = None
    rain_1h_mm: Optional[float] = None
    rain_3h_mm: Optional[float] = None
    snow_1h_mm: Optional[float] = None
    snow_3h_mm: Optional[float] = None
    condition: Optional[str] = None

    @classmethod
    def from_conditions(cls, current: CurrentConditions) -> "StormReadings":
        return cls(
            pressure_hpa=current.pressure_hpa,
            wind_mph=current.wind_mph,
            wind_gust_mph=current.wind_gust_mph,
            visibility_mi=current.visibility_mi,
            cloud_pct=current.cloud_pct,
            rain_1h_mm=current.rain_1h_mm,
            rain_3h_mm=current.rain_3h_mm,
            snow_1h_mm=current.snow_1h_mm,
            snow_3h_mm=current.snow_3h_mm,
            condition=current.condition,
        )

    @property
    def precip_1h_mm(self) -> float:
        return (self.rain_1h_mm or 0.0) + (self.snow_1h_mm or 0.0)

    @property
    def precip_3h_mm(self) -> float:
        return (self.rain_3h_mm or 0.0) + (self.snow_3h_mm or 0.0)


@dataclass(frozen=True)
class StormSignal:
    score: int
    label: str
    vibe: str
    summary: str
    reasons: Tuple[str, ...] = ()


__all__ = [
    "City",
    "CurrentConditions",
    "DailyBar",
    "ForecastBlock",
    "ForecastSeries",
    "Location",
    "StormReadings",
    "StormSignal",
]
