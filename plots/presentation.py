"""Plotly payload builders for spectrum charts.

Everything here is declarative: the functions derive trace, layout, frame, and
animation payloads from a SpectrumChartConfig and the sorted Series. The
payload shapes follow Plotly.js (`newPlot`, `addFrames`, `animate`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, TypedDict

from spectrum.bands import Band, parse_band_highlights
from spectrum.frames import Frame
from spectrum.points import Series

from .mounts import SpectrumChartConfig

DEFAULT_TITLE: Final[str] = "Spectrum overview"
DEFAULT_X_AXIS_TITLE: Final[str] = "Frequency (GHz)"
DEFAULT_Y_AXIS_TITLE: Final[str] = "Amplitude (dB)"
DEFAULT_HOVER_VALUE_LABEL: Final[str] = "Amplitude"
DEFAULT_LINE_COLOR: Final[str] = "#0284C7"

BAND_FILL_COLOR: Final[str] = "rgba(14, 165, 233, 0.08)"
ANNOTATION_COLOR: Final[str] = "#0F172A"
GRID_COLOR: Final[str] = "#E2E8F0"

RENDER_CONFIG: Final[dict[str, Any]] = {
    "responsive": True,
    "displaylogo": False,
    "modeBarButtonsToRemove": ["lasso2d", "select2d"],
}


class PlotlyTrace(TypedDict):
    """A Plotly scatter trace payload."""

    type: str
    mode: str
    line: dict[str, Any]
    hovertemplate: str
    x: list[float]
    y: list[float]


class PlotlyFrameData(TypedDict):
    """Trace data carried by one animation frame."""

    x: list[float]
    y: list[float]


class PlotlyFrame(TypedDict):
    """A Plotly frame payload for `Plotly.addFrames`."""

    name: str
    data: list[PlotlyFrameData]
    traces: list[int]


class AnimationOptions(TypedDict):
    """Options for `Plotly.animate`."""

    frame: dict[str, Any]
    transition: dict[str, Any]
    mode: str


@dataclass(frozen=True, slots=True)
class ZoomPreset:
    """A preset x-axis view exposed as a layout button.

    Args:
        label: Button label.
        x_range: Fixed `(start, end)` range, or None for autorange.
    """

    label: str
    x_range: tuple[float, float] | None = None

    def button(self) -> dict[str, Any]:
        """Return the Plotly `relayout` button payload."""

        if self.x_range is None:
            args: dict[str, Any] = {"xaxis.autorange": True}
        else:
            args = {"xaxis.range": list(self.x_range)}
        return {"label": self.label, "method": "relayout", "args": [args]}


ZOOM_PRESETS: Final[tuple[ZoomPreset, ...]] = (
    ZoomPreset(label="Full range"),
    ZoomPreset(label="0 – 23 GHz", x_range=(0, 23)),
    ZoomPreset(label="30 – 80 GHz", x_range=(30, 80)),
)


def build_trace(config: SpectrumChartConfig, series: Series) -> PlotlyTrace:
    """Build the initial line trace holding only the first point.

    Args:
        config: Chart configuration.
        series: Sorted Series (may be empty).

    Returns:
        A scatter trace payload; `x`/`y` are empty when `series` is empty.
    """

    value_label = config.y_label or DEFAULT_HOVER_VALUE_LABEL
    first = series[0] if series else None
    return {
        "type": "scatter",
        "mode": "lines",
        "line": {"width": 3, "color": config.line_color or DEFAULT_LINE_COLOR},
        "hovertemplate": f"<b>%{{x:.2f}} GHz</b><br>{value_label}: %{{y:.2f}}<extra></extra>",
        "x": [first.frequency] if first is not None else [],
        "y": [first.value] if first is not None else [],
    }


def build_band_decorations(bands: tuple[Band, ...]) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Build one shaded region per band, plus an annotation for labelled bands.

    Returns:
        A `(shapes, annotations)` pair of Plotly layout payload lists.
    """

    shapes: list[dict[str, Any]] = []
    annotations: list[dict[str, Any]] = []
    for band in bands:
        shapes.append(
            {
                "type": "rect",
                "xref": "x",
                "yref": "paper",
                "x0": band.start,
                "x1": band.end,
                "y0": 0,
                "y1": 1,
                "fillcolor": BAND_FILL_COLOR,
                "line": {"width": 0},
                "layer": "below",
            }
        )
        if band.label:
            annotations.append(
                {
                    "text": band.label,
                    "x": band.midpoint,
                    "y": 1.02,
                    "xref": "x",
                    "yref": "paper",
                    "showarrow": False,
                    "font": {"size": 12, "color": ANNOTATION_COLOR},
                }
            )
    return shapes, annotations


def build_layout(config: SpectrumChartConfig) -> dict[str, Any]:
    """Build the Plotly layout: titles, axes, bands, hover styling, zoom presets."""

    shapes, annotations = build_band_decorations(parse_band_highlights(config.band_highlights))
    return {
        "title": {
            "text": config.title or DEFAULT_TITLE,
            "font": {"family": "Inter, sans-serif", "size": 20},
        },
        "xaxis": {
            "title": config.x_label or DEFAULT_X_AXIS_TITLE,
            "rangeslider": {"visible": True},
            "zeroline": False,
            "gridcolor": GRID_COLOR,
        },
        "yaxis": {
            "title": config.y_label or DEFAULT_Y_AXIS_TITLE,
            "zeroline": False,
            "gridcolor": GRID_COLOR,
        },
        "margin": {"t": 60, "r": 40, "b": 60, "l": 70},
        "plot_bgcolor": "#FFFFFF",
        "paper_bgcolor": "rgba(0,0,0,0)",
        "hovermode": "x unified",
        "hoverlabel": {"bgcolor": ANNOTATION_COLOR, "font": {"color": "#F8FAFC"}},
        "updatemenus": [
            {
                "type": "buttons",
                "direction": "right",
                "x": 0.5,
                "y": 1.2,
                "xanchor": "center",
                "buttons": [preset.button() for preset in ZOOM_PRESETS],
            }
        ],
        "shapes": shapes,
        "annotations": annotations,
    }


def frame_payload(frame: Frame) -> PlotlyFrame:
    """Convert a scheduled Frame into a Plotly frame payload."""

    return {
        "name": frame.name,
        "data": [{"x": list(frame.cumulative_x), "y": list(frame.cumulative_y)}],
        "traces": [0],
    }


def animation_options(config: SpectrumChartConfig) -> AnimationOptions:
    """Build the `Plotly.animate` options for sequential frame playback."""

    return {
        "frame": {"duration": config.frame_duration_ms, "redraw": True},
        "transition": {"duration": 0},
        "mode": "immediate",
    }
