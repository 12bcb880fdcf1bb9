"""URL configuration for spectrum chart views."""

from __future__ import annotations

from django.urls import path

from plots import views

app_name = "plots"

urlpatterns = [
    path("spectrum/<slug:slug>/", views.spectrum_chart, name="spectrum_chart"),
    path("spectrum/<slug:slug>/handoff.json", views.spectrum_handoff, name="spectrum_handoff"),
]
