"""Root URL configuration."""
from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("", include("weathervibe.dashboard.urls")),
    path("", include("weathervibe.api.urls")),
]
