"""Orchestrates one dashboard render: two fetches, then the derived values."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from django.conf import settings

from weathervibe.core.entities import (
    CurrentConditions,
    DailyBar,
    ForecastBlock,
    ForecastSeries,
    Location,
    StormSignal,
)
from weathervibe.core.forecast import aggregate
from weathervibe.core.providers.base import ProviderError, RequestConfig
from weathervibe.core.providers.openweather import OpenWeatherProvider
from weathervibe.core.storm import storm_signal_for


logger = logging.getLogger(__name__)


class ConditionsProvider(Protocol):
    name: str

    def current(self, location: Location) -> CurrentConditions:
        ...

    def forecast(self, location: Location) -> ForecastSeries:
        ...


@dataclass(frozen=True)
class Dashboard:
    current: CurrentConditions
    storm: StormSignal
    forecast: Optional[ForecastSeries] = None
    today: Tuple[ForecastBlock, ...] = field(default_factory=tuple)
    daily: Tuple[DailyBar, ...] = field(default_factory=tuple)
    forecast_error: Optional[str] = None


class DashboardService:
    """Fetch current conditions and forecast, then score and aggregate them.

    A failing forecast degrades the dashboard; a failing current-conditions
    fetch fails the whole render.
    """

    def __init__(self, provider: ConditionsProvider) -> None:
        self._provider = provider

    def build(self, current_location: Location, forecast_location: Location) -> Dashboard:
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="weather-fetch") as pool:
            current_future = pool.submit(self._provider.current, current_location)
            forecast_future = pool.submit(self._provider.forecast, forecast_location)
            current = current_future.result()
            forecast, forecast_error = self._settle_forecast(forecast_future)

        storm = storm_signal_for(current)
        if forecast is None:
            return Dashboard(current=current, storm=storm, forecast_error=forecast_error)

        summary = aggregate(forecast)
        return Dashboard(
            current=current,
            storm=storm,
            forecast=forecast,
            today=summary.today,
            daily=summary.daily,
        )

    def _settle_forecast(self, future) -> Tuple[Optional[ForecastSeries], Optional[str]]:
        try:
            return future.result(), None
        except ProviderError as exc:
            logger.warning("Forecast unavailable from %s: %s", self._provider.name, exc)
            return None, str(exc)


def get_weather_provider() -> OpenWeatherProvider:
    """Build the provider from settings; raises ``ConfigError`` without a key."""
    return OpenWeatherProvider(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        request_config=RequestConfig(timeout=settings.OPENWEATHER_TIMEOUT),
    )


def default_current_location() -> Location:
    return Location.at(settings.WEATHER_DEFAULT_LAT, settings.WEATHER_DEFAULT_LON)


def default_forecast_location() -> Location:
    return Location.named(settings.WEATHER_DEFAULT_QUERY)


__all__ = [
    "Dashboard",
    "DashboardService",
    "default_current_location",
    "default_forecast_location",
    "get_weather_provider",
]
