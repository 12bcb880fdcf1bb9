"""App configuration for the `plots` Django app."""

from __future__ import annotations

from django.apps import AppConfig


class PlotsConfig(AppConfig):
    """Configuration for the `plots` app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "plots"

    def ready(self) -> None:
        """Register system checks."""

        from plots import checks  # noqa: F401
