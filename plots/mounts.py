"""Chart mount points and their configuration attributes.

A mount point is the page element a chart attaches to. It owns a small set of
string attributes (title, axis labels, colours, band highlights, frame
duration, data source locator) and may carry an embedded JSON data block.

Mount definitions are declared in a YAML file:

    fallback_data:
      - [10.0, -42.5]
    charts:
      overview:
        element_id: spectrum-overview
        attributes:
          chart-title: Spectrum overview
          band-highlights: "0:23:K band|30:80:V band"
        embedded: '{"points": [{"x": 1, "y": -40}]}'
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Final

import yaml

from spectrum.points import coerce_number

CHART_TITLE: Final[str] = "chart-title"
X_LABEL: Final[str] = "x-label"
Y_LABEL: Final[str] = "y-label"
LINE_COLOR: Final[str] = "line-color"
BAND_HIGHLIGHTS: Final[str] = "band-highlights"
ANIMATION_DURATION: Final[str] = "animation-duration"
SOURCE: Final[str] = "source"

MOUNT_ATTRIBUTES: Final[tuple[str, ...]] = (
    CHART_TITLE,
    X_LABEL,
    Y_LABEL,
    LINE_COLOR,
    BAND_HIGHLIGHTS,
    ANIMATION_DURATION,
    SOURCE,
)

DEFAULT_FRAME_DURATION_MS: Final[float] = 30.0


class MountConfigError(ValueError):
    """Raised when the mount definitions file is present but malformed."""


@dataclass(frozen=True, slots=True)
class ChartMount:
    """A page element hosting one spectrum chart.

    Args:
        element_id: DOM id of the element the renderer draws into.
        attributes: Configuration attributes keyed by `MOUNT_ATTRIBUTES` names.
        embedded_document: Optional co-located JSON data block (raw text).
    """

    element_id: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    embedded_document: str | None = None

    def attribute(self, name: str) -> str | None:
        """Return a non-blank attribute value, or None."""

        value = self.attributes.get(name)
        if value is None or not value.strip():
            return None
        return value

    @property
    def source(self) -> str | None:
        """Return the remote data locator, if any."""

        return self.attribute(SOURCE)

    def with_source(self, source: str) -> ChartMount:
        """Return a copy of this mount with the data locator replaced."""

        return replace(self, attributes={**self.attributes, SOURCE: source})


@dataclass(frozen=True, slots=True)
class SpectrumChartConfig:
    """Typed view of a mount's presentation attributes.

    Unset attributes stay None so the presentation layer can apply its own
    defaults (the y-axis title and the hover label fall back differently).

    Args:
        title: Chart title text.
        x_label: X-axis title text.
        y_label: Y-axis title text.
        line_color: Any CSS colour string for the trace line.
        band_highlights: Raw `start:end:label|...` band specification.
        frame_duration_ms: Per-frame animation duration in milliseconds.
    """

    title: str | None = None
    x_label: str | None = None
    y_label: str | None = None
    line_color: str | None = None
    band_highlights: str | None = None
    frame_duration_ms: float = DEFAULT_FRAME_DURATION_MS

    @classmethod
    def from_mount(cls, mount: ChartMount) -> SpectrumChartConfig:
        """Build a config from a mount's attributes."""

        return cls(
            title=mount.attribute(CHART_TITLE),
            x_label=mount.attribute(X_LABEL),
            y_label=mount.attribute(Y_LABEL),
            line_color=mount.attribute(LINE_COLOR),
            band_highlights=mount.attribute(BAND_HIGHLIGHTS),
            frame_duration_ms=parse_frame_duration(mount.attribute(ANIMATION_DURATION)),
        )


def parse_frame_duration(raw: str | None) -> float:
    """Parse a frame duration, falling back to the default for unusable values."""

    duration = coerce_number(raw)
    if not math.isfinite(duration) or duration <= 0:
        return DEFAULT_FRAME_DURATION_MS
    return duration


@dataclass(frozen=True, slots=True)
class MountRegistry:
    """All chart mounts declared for the site.

    Args:
        charts: Mounts keyed by URL slug.
        fallback_data: Raw point candidates used when a mount has neither an
            embedded block nor a source locator. None when not declared.
    """

    charts: Mapping[str, ChartMount] = field(default_factory=dict)
    fallback_data: tuple[Any, ...] | None = None

    def get(self, slug: str) -> ChartMount | None:
        """Return the mount for `slug`, or None."""

        return self.charts.get(slug)


def load_mount_registry(path: str | Path) -> MountRegistry:
    """Load mount definitions from a YAML file.

    Args:
        path: Path to the YAML mount definitions file.

    Returns:
        MountRegistry. A missing file yields an empty registry.

    Raises:
        MountConfigError: When the file is not valid YAML or has the wrong shape.
    """

    mount_path = Path(path)
    if not mount_path.exists():
        return MountRegistry()

    try:
        payload = yaml.safe_load(mount_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise MountConfigError(f"Mount definitions file is not valid YAML: {mount_path}") from exc
    return parse_mount_registry(payload, origin=str(mount_path))


def parse_mount_registry(payload: Any, *, origin: str = "<memory>") -> MountRegistry:
    """Validate a decoded mount definitions payload.

    Args:
        payload: Decoded YAML/JSON mapping.
        origin: Label used in error messages.

    Returns:
        MountRegistry built from the payload.

    Raises:
        MountConfigError: When the payload has the wrong shape.
    """

    if not isinstance(payload, Mapping):
        raise MountConfigError(f"{origin}: top-level value must be a mapping.")

    raw_charts = payload.get("charts") or {}
    if not isinstance(raw_charts, Mapping):
        raise MountConfigError(f"{origin}: `charts` must be a mapping of slug to mount.")

    charts = {str(slug): _parse_mount(slug, raw, origin=origin) for slug, raw in raw_charts.items()}

    fallback_data = payload.get("fallback_data")
    if fallback_data is not None and not isinstance(fallback_data, list):
        raise MountConfigError(f"{origin}: `fallback_data` must be a list of points.")

    return MountRegistry(
        charts=charts,
        fallback_data=tuple(fallback_data) if fallback_data is not None else None,
    )


def _parse_mount(slug: Any, raw: Any, *, origin: str) -> ChartMount:
    """Parse one `charts.<slug>` entry."""

    if not isinstance(raw, Mapping):
        raise MountConfigError(f"{origin}: chart {slug!r} must be a mapping.")

    attributes = raw.get("attributes") or {}
    if not isinstance(attributes, Mapping):
        raise MountConfigError(f"{origin}: chart {slug!r} `attributes` must be a mapping.")
    unknown = sorted(str(key) for key in attributes if key not in MOUNT_ATTRIBUTES)
    if unknown:
        raise MountConfigError(f"{origin}: chart {slug!r} has unknown attributes: {unknown}.")

    embedded = raw.get("embedded")
    if embedded is not None and not isinstance(embedded, str):
        raise MountConfigError(f"{origin}: chart {slug!r} `embedded` must be JSON text.")

    return ChartMount(
        element_id=str(raw.get("element_id") or f"spectrum-{slug}"),
        attributes={str(key): str(value) for key, value in attributes.items() if value is not None},
        embedded_document=embedded,
    )
