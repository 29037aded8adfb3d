"""REST API views proxying the normalized OpenWeather data."""
from __future__ import annotations

from dataclasses import asdict
import logging

from django.conf import settings
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from weathervibe.core.entities import ForecastSeries, Location
from weathervibe.core.providers.base import ConfigError, MalformedResponse, UpstreamError
from weathervibe.core.services.dashboard import (
    default_current_location,
    default_forecast_location,
    get_weather_provider,
)


logger = logging.getLogger(__name__)


class InvalidLocation(ValueError):
    """Raised when the query string names a location we cannot use."""


def location_from_params(params, default: Location) -> Location:
    """Pick a location from ``lat``/``lon``, ``q`` or ``zip``, else ``default``."""
    lat, lon = params.get("lat"), params.get("lon")
    if lat is not None or lon is not None:
        if lat is None or lon is None:
            raise InvalidLocation("lat and lon must be provided together")
        try:
            return Location.at(float(lat), float(lon))
        except ValueError:
            raise InvalidLocation("lat and lon must be valid floating point numbers") from None
    if params.get("q"):
        return Location.named(params["q"])
    if params.get("zip"):
        return Location.postal(params["zip"])
    return default


def error_response(message: str, status_code: int) -> Response:
    return Response({"error": message}, status=status_code)


def upstream_passthrough(exc: UpstreamError):
    """Relay the provider's own status and body."""
    payload = exc.payload
    if payload is not None:
        return Response(payload, status=exc.status_code)
    return HttpResponse(exc.body, status=exc.status_code, content_type="text/plain; charset=utf-8")


def serialize_forecast(series: ForecastSeries) -> dict:
    return {
        "city": asdict(series.city) if series.city is not None else None,
        "list": [asdict(block) for block in series.blocks],
    }


class CurrentWeatherView(APIView):
    """Normalized current conditions for the default or requested location."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            location = location_from_params(request.query_params, default_current_location())
        except InvalidLocation as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            current = get_weather_provider().current(location)
        except ConfigError as exc:
            return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except UpstreamError as exc:
            return upstream_passthrough(exc)
        except MalformedResponse as exc:
            logger.error("Malformed current conditions: %s", exc)
            return error_response(f"Malformed upstream response: {exc}", status.HTTP_502_BAD_GATEWAY)

        return Response(asdict(current), status=status.HTTP_200_OK)


class ForecastView(APIView):
    """5 day / 3 hour forecast blocks for ``?q=<place>`` (or ``zip``, ``lat``/``lon``)."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            location = location_from_params(request.query_params, default_forecast_location())
        except InvalidLocation as exc:
            return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

        try:
            series = get_weather_provider().forecast(location)
        except ConfigError as exc:
            return error_response(str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        except UpstreamError as exc:
            return error_response("Forecast fetch failed", exc.status_code)
        except MalformedResponse as exc:
            logger.error("Malformed forecast: %s", exc)
            return error_response("Forecast fetch failed", status.HTTP_502_BAD_GATEWAY)

        return Response(serialize_forecast(series), status=status.HTTP_200_OK)


class EnvTestView(APIView):
    """Report whether the credential is configured, never its value."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        key = settings.OPENWEATHER_API_KEY
        return Response({"hasKey": bool(key), "keyLength": len(key) if key else None})
