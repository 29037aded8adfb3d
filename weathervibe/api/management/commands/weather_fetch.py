"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

from dataclasses import asdict
import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from weathervibe.core.entities import Location
from weathervibe.core.forecast import aggregate
from weathervibe.core.providers.base import ConfigError, MalformedResponse, UpstreamError
from weathervibe.core.services.dashboard import default_current_location, get_weather_provider
from weathervibe.core.storm import storm_signal_for


class Command(BaseCommand):
    help = "Fetch current conditions and the storm signal for a location"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--q", type=str, help="Place name, e.g. 'Providence,US'")
        parser.add_argument("--zip", type=str, help="Postal code, e.g. '02903,US'")
        parser.add_argument("--forecast", action="store_true", help="Include the daily forecast bars")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        location = self._location(options)
        try:
            provider = get_weather_provider()
            current = provider.current(location)
            payload = {"current": asdict(current), "storm": asdict(storm_signal_for(current))}
            if options.get("forecast"):
                summary = aggregate(provider.forecast(location))
                payload["daily"] = [asdict(bar) for bar in summary.daily]
        except ConfigError as exc:
            raise CommandError(str(exc)) from exc
        except UpstreamError as exc:
            raise CommandError(f"OpenWeather returned {exc.status_code}: {exc.body}") from exc
        except MalformedResponse as exc:
            raise CommandError(f"Malformed OpenWeather response: {exc}") from exc

        self.stdout.write(json.dumps(payload))

    def _location(self, options: dict) -> Location:
        latitude, longitude = options.get("lat"), options.get("lon")
        if latitude is not None or longitude is not None:
            if latitude is None or longitude is None:
                raise CommandError("--lat and --lon must be given together")
            return Location.at(latitude, longitude)
        if options.get("q"):
            return Location.named(options["q"])
        if options.get("zip"):
            return Location.postal(options["zip"])
        return default_current_location()
