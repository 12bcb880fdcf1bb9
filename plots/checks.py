"""System checks for the spectrum pipeline.

`manage.py check` runs these at startup. The delimited-text check parses a
known space-delimited sample through the same parser used for remote sources,
so a regression in separator inference is reported before any chart loads.
"""

from __future__ import annotations

import logging
from typing import Any, Final

from django.conf import settings
from django.core.checks import CheckMessage, Error, Tags, Warning, register

from spectrum.series import parse_delimited

logger = logging.getLogger(__name__)

SPACE_DELIMITED_SAMPLE: Final[str] = "100 0.5\n200 0.6"


@register("spectrum")
def check_space_delimited_sample(app_configs: Any = None, **kwargs: Any) -> list[CheckMessage]:
    """Verify that space-delimited rows parse into numeric points."""

    parsed = parse_delimited(SPACE_DELIMITED_SAMPLE)
    if not parsed or not all(point.is_valid for point in parsed):
        return [
            Warning(
                "Space-delimited sample failed to parse via the data loading pipeline.",
                hint=f"parse_delimited({SPACE_DELIMITED_SAMPLE!r}) returned {parsed!r}.",
                id="plots.W001",
            )
        ]
    logger.debug("Space-delimited sample parsed for data loading check: %r", parsed)
    return []


@register("spectrum", Tags.compatibility)
def check_spectrum_settings(app_configs: Any = None, **kwargs: Any) -> list[CheckMessage]:
    """Validate spectrum settings that would otherwise fail at request time."""

    errors: list[CheckMessage] = []
    target = getattr(settings, "SPECTRUM_TARGET_FRAME_COUNT", 90)
    if not isinstance(target, int) or target < 1:
        errors.append(
            Error(
                "SPECTRUM_TARGET_FRAME_COUNT must be a positive integer.",
                hint=f"Got {target!r}.",
                id="plots.E001",
            )
        )
    timeout = getattr(settings, "SPECTRUM_FETCH_TIMEOUT_SECONDS", 30)
    if not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append(
            Error(
                "SPECTRUM_FETCH_TIMEOUT_SECONDS must be a positive number.",
                hint=f"Got {timeout!r}.",
                id="plots.E002",
            )
        )
    return errors
