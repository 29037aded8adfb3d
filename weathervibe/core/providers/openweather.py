"""OpenWeather weather provider."""
from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

import requests

from weathervibe.core.conversions import (
    dew_point_f,
    epoch_seconds,
    local_time_label,
    meters_to_miles,
    utc_offset,
)
from weathervibe.core.entities import (
    City,
    CurrentConditions,
    ForecastBlock,
    ForecastSeries,
    Location,
)
from weathervibe.core.providers.base import (
    ConfigError,
    MalformedResponse,
    RequestConfig,
    WeatherProvider,
)


class OpenWeatherProvider(WeatherProvider):
    """Current conditions and 5 day / 3 hour forecast from OpenWeather.

    Both endpoints are queried in imperial units and reshaped into the flat
    :class:`CurrentConditions` and :class:`ForecastSeries` records.
    """

    name = "openweather"
    units = "imperial"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        base_url: str = "https://api.openweathermap.org/data/2.5",
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        if not api_key:
            raise ConfigError("Missing OPENWEATHER_API_KEY")
        super().__init__(session=session, request_config=request_config)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def current(self, location: Location) -> CurrentConditions:
        """Return normalized current conditions for ``location``."""
        data = self._get("weather", location)
        main = _section(data, "main")
        wind = _section(data, "wind")
        sys_info = _section(data, "sys")
        rain = _section(data, "rain")
        snow = _section(data, "snow")
        weather = _first_weather(data)

        temp_f = _required(main, "temp", "main.temp")
        humidity = _required(main, "humidity", "main.humidity")
        pressure = _required(main, "pressure", "main.pressure")
        wind_speed = _required(wind, "speed", "wind.speed")

        offset = utc_offset(_integer(data.get("timezone")))
        sunrise = epoch_seconds(_integer(sys_info.get("sunrise")))
        sunset = epoch_seconds(_integer(sys_info.get("sunset")))

        if location.has_coordinates:
            latitude, longitude = location.latitude, location.longitude
        else:
            coord = _section(data, "coord")
            latitude, longitude = _number(coord.get("lat")), _number(coord.get("lon"))

        return CurrentConditions(
            latitude=latitude,
            longitude=longitude,
            name=_text(data.get("name")),
            country=_text(sys_info.get("country")),
            temp_f=temp_f,
            feels_like_f=_number(main.get("feels_like")),
            temp_min_f=_number(main.get("temp_min")),
            temp_max_f=_number(main.get("temp_max")),
            condition=_text(weather.get("main")),
            description=_text(weather.get("description")) or "—",
            icon=_text(weather.get("icon")),
            wind_mph=wind_speed,
            wind_gust_mph=_number(wind.get("gust")),
            wind_deg=_number(wind.get("deg")),
            humidity=humidity,
            pressure_hpa=pressure,
            visibility_mi=meters_to_miles(_number(data.get("visibility"))),
            sunrise=sunrise,
            sunset=sunset,
            sunrise_local=local_time_label(sunrise, offset),
            sunset_local=local_time_label(sunset, offset),
            timezone_offset=offset,
            rain_1h_mm=_number(rain.get("1h")),
            rain_3h_mm=_number(rain.get("3h")),
            snow_1h_mm=_number(snow.get("1h")),
            snow_3h_mm=_number(snow.get("3h")),
            cloud_pct=_number(_section(data, "clouds").get("all")),
            dew_point_f=dew_point_f(temp_f, humidity),
        )

    def forecast(self, location: Location) -> ForecastSeries:
        """Return the 5 day / 3 hour forecast for ``location``."""
        data = self._get("forecast", location)
        items = data.get("list")
        blocks: List[ForecastBlock] = []
        for item in items if isinstance(items, list) else []:
            block = self._parse_block(item)
            if block is not None:
                blocks.append(block)
        return ForecastSeries(city=self._parse_city(data.get("city")), blocks=tuple(blocks))

    # helpers ------------------------------------------------------------
    def _get(self, endpoint: str, location: Location) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            **location.as_params(),
            "appid": self.api_key,
            "units": self.units,
        }
        response = self._request("GET", f"{self.base_url}/{endpoint}", params=params)
        return self._json(response)

    def _parse_block(self, item: Any) -> Optional[ForecastBlock]:
        if not isinstance(item, dict):
            return None
        dt = epoch_seconds(_integer(item.get("dt")))
        if dt is None:
            self._log.debug("Skipping forecast block without a usable dt: %r", item)
            return None
        main = _section(item, "main")
        wind = _section(item, "wind")
        weather = _first_weather(item)
        return ForecastBlock(
            dt=dt,
            dt_txt=_text(item.get("dt_txt")),
            temp_f=_number(main.get("temp")),
            temp_min_f=_number(main.get("temp_min")),
            temp_max_f=_number(main.get("temp_max")),
            icon=_text(weather.get("icon")),
            condition=_text(weather.get("main")),
            description=_text(weather.get("description")),
            wind_mph=_number(wind.get("speed")),
            wind_deg=_number(wind.get("deg")),
            cloud_pct=_number(_section(item, "clouds").get("all")),
            pop=_number(item.get("pop")),
            rain_3h_mm=_number(_section(item, "rain").get("3h")),
            snow_3h_mm=_number(_section(item, "snow").get("3h")),
        )

    def _parse_city(self, raw: Any) -> Optional[City]:
        if not isinstance(raw, dict):
            return None
        coord = raw.get("coord")
        lat = _number(coord.get("lat")) if isinstance(coord, dict) else None
        lon = _number(coord.get("lon")) if isinstance(coord, dict) else None
        return City(
            name=_text(raw.get("name")),
            country=_text(raw.get("country")),
            coord={"lat": lat, "lon": lon} if lat is not None and lon is not None else None,
            timezone=utc_offset(_integer(raw.get("timezone"))),
        )


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _first_weather(data: Dict[str, Any]) -> Dict[str, Any]:
    weather = data.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], dict):
        return weather[0]
    return {}


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def _integer(value: Any) -> Optional[int]:
    number = _number(value)
    return int(number) if number is not None else None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _required(section: Dict[str, Any], key: str, label: str) -> float:
    value = _number(section.get(key))
    if value is None:
        raise MalformedResponse(f"missing {label}")
    return value


__all__ = ["OpenWeatherProvider"]
