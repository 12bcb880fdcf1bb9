"""Renderer boundary for spectrum charts.

The actual drawing happens in the browser with Plotly.js. The pipeline talks to
a `SpectrumRenderer`; the web views use `PlotlyCommandRenderer`, which records
each call so `plots/static/plots/spectrum.js` can replay them in order.
"""

from __future__ import annotations

from typing import Any, Protocol, TypedDict

from .presentation import AnimationOptions, PlotlyFrame, PlotlyFrameData, PlotlyTrace


class SpectrumRenderer(Protocol):
    """External charting collaborator."""

    def create_plot(
        self,
        mount_id: str,
        traces: list[PlotlyTrace],
        layout: dict[str, Any],
        config: dict[str, Any],
    ) -> None: ...

    def register_frames(self, mount_id: str, frames: list[PlotlyFrame]) -> None: ...

    def play_frames(self, mount_id: str, frame_names: list[str], options: AnimationOptions) -> None: ...

    def extend_trace(self, mount_id: str, update: PlotlyFrameData, trace_indices: list[int]) -> None: ...


class RendererCommand(TypedDict):
    """A recorded Plotly.js call (`Plotly[method](element, ...args)`)."""

    method: str
    args: list[Any]


class PlotlyCommandRenderer:
    """Record renderer calls as Plotly.js commands for client-side replay.

    Attributes:
        mount_id: Element id of the last plot created, or None.
        commands: Recorded commands in call order.
    """

    def __init__(self) -> None:
        self.mount_id: str | None = None
        self.commands: list[RendererCommand] = []

    def create_plot(
        self,
        mount_id: str,
        traces: list[PlotlyTrace],
        layout: dict[str, Any],
        config: dict[str, Any],
    ) -> None:
        self.mount_id = mount_id
        self._record("newPlot", traces, layout, config)

    def register_frames(self, mount_id: str, frames: list[PlotlyFrame]) -> None:
        self._record("addFrames", frames)

    def play_frames(self, mount_id: str, frame_names: list[str], options: AnimationOptions) -> None:
        self._record("animate", frame_names, options)

    def extend_trace(self, mount_id: str, update: PlotlyFrameData, trace_indices: list[int]) -> None:
        # extendTraces expects one array per trace index.
        self._record("extendTraces", {"x": [update["x"]], "y": [update["y"]]}, trace_indices)

    def _record(self, method: str, *args: Any) -> None:
        self.commands.append({"method": method, "args": list(args)})
