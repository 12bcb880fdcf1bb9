"""URL configuration for spectrumsite."""

from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("", include("plots.urls")),
]
