"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from weathervibe.api.views import CurrentWeatherView, EnvTestView, ForecastView

urlpatterns = [
    path("weather/current", CurrentWeatherView.as_view(), name="weather-current"),
    path("weather/forecast", ForecastView.as_view(), name="weather-forecast"),
    path("envtest", EnvTestView.as_view(), name="envtest"),
]
