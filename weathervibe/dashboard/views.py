"""Server-rendered dashboard page."""
from __future__ import annotations

import logging
from typing import Any, Dict

from django.shortcuts import render
from django.views import View

from weathervibe.core.providers.base import ConfigError, MalformedResponse, UpstreamError
from weathervibe.core.services.dashboard import (
    Dashboard,
    DashboardService,
    default_current_location,
    default_forecast_location,
    get_weather_provider,
)
from weathervibe.dashboard import presenters
from weathervibe.dashboard.forms import ZipSearchForm


logger = logging.getLogger(__name__)


def dashboard_context(dashboard: Dashboard, now: float | None = None) -> Dict[str, Any]:
    current = dashboard.current
    offset = dashboard.forecast.timezone_offset if dashboard.forecast else 0
    lines = presenters.precip_lines(current)
    return {
        "current": current,
        "place": presenters.place(current),
        "temp": presenters.degrees(current.temp_f),
        "feels_like": presenters.degrees(current.feels_like_f),
        "hi_lo": presenters.hi_lo(current),
        "icon_url": presenters.icon_url(current.icon),
        "icon_alt": presenters.icon_alt(current),
        "icon_kind": presenters.icon_behavior(current.condition),
        "dim_icon": presenters.is_night(current, now),
        "storm": dashboard.storm,
        "tint": presenters.storm_tint(dashboard.storm.label),
        "coord": dashboard.forecast.coord if dashboard.forecast else None,
        "strip": presenters.strip_items(dashboard.today, offset),
        "trend": presenters.temp_trend(dashboard.today),
        "daily": presenters.daily_rows(dashboard.daily),
        "cloud_note": presenters.cloud_note(current.cloud_pct),
        "dew_point": presenters.degrees(current.dew_point_f),
        "dew_point_note": presenters.dew_point_note(current.dew_point_f),
        "visibility_note": presenters.visibility_note(current.visibility_mi),
        "precip_lines": lines,
        "forecast_error": dashboard.forecast_error,
    }


class DashboardView(View):
    """Render current conditions, storm signal and forecast for one location."""

    template_name = "dashboard/index.html"
    error_template_name = "dashboard/error.html"

    def get(self, request, *args, **kwargs):
        form = ZipSearchForm(request.GET or None)
        searched = form.location() if form.is_bound else None
        current_location = searched or default_current_location()
        forecast_location = searched or default_forecast_location()

        try:
            service = DashboardService(get_weather_provider())
            dashboard = service.build(current_location, forecast_location)
        except ConfigError as exc:
            logger.error("Dashboard unavailable: %s", exc)
            return render(request, self.error_template_name, {"form": form, "error": str(exc)}, status=500)
        except (UpstreamError, MalformedResponse) as exc:
            logger.warning("Current conditions unavailable: %s", exc)
            return render(
                request,
                self.error_template_name,
                {"form": form, "error": "Could not load weather data."},
                status=502,
            )

        context = dashboard_context(dashboard)
        context["form"] = form
        return render(request, self.template_name, context)
