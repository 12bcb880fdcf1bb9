"""End-to-end spectrum chart pipeline.

Sequence: mount → data resolution → renderer availability → sort → frame
schedule → trace/layout → renderer handoff. Every documented failure degrades
to a logged diagnostic and an outcome status; nothing raises past
`run_spectrum_pipeline` for missing mounts, missing renderers, or bad data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from spectrum.frames import DEFAULT_TARGET_FRAME_COUNT, Frame, schedule_frames
from spectrum.points import Series
from spectrum.series import sort_series

from .mounts import ChartMount, SpectrumChartConfig
from .presentation import RENDER_CONFIG, animation_options, build_layout, build_trace, frame_payload
from .renderers import SpectrumRenderer
from .sources import DataSourceResolver

logger = logging.getLogger(__name__)

PipelineStatus = Literal["animated", "extended", "mount_missing", "renderer_missing", "no_data"]


@dataclass(frozen=True, slots=True)
class PipelineOutcome:
    """Result of one pipeline run.

    Args:
        status: What the pipeline did (or why it stopped).
        series: The sorted Series handed to the renderer (empty when aborted).
        frames: The frame schedule handed to the renderer.
    """

    status: PipelineStatus
    series: Series = ()
    frames: tuple[Frame, ...] = ()

    @property
    def rendered(self) -> bool:
        """Return True when the renderer received a plot."""

        return self.status in ("animated", "extended")


def run_spectrum_pipeline(
    mount: ChartMount | None,
    *,
    resolver: DataSourceResolver,
    renderer: SpectrumRenderer | None,
    target_frame_count: int = DEFAULT_TARGET_FRAME_COUNT,
) -> PipelineOutcome:
    """Load, schedule, and hand off one spectrum chart.

    Args:
        mount: The chart mount point, or None when it could not be found.
        resolver: Data source resolver.
        renderer: External renderer, or None when it is unavailable.
        target_frame_count: Frame budget passed to the scheduler.

    Returns:
        PipelineOutcome describing what was handed to the renderer.
    """

    if mount is None:
        logger.warning("Missing chart mount point; nothing to render.")
        return PipelineOutcome(status="mount_missing")

    series = resolver.resolve(mount)

    if renderer is None:
        logger.warning("Plotly renderer not available for #%s.", mount.element_id)
        return PipelineOutcome(status="renderer_missing")

    series = sort_series(series)
    if not series:
        return PipelineOutcome(status="no_data")

    frames = schedule_frames(series, target_frame_count=target_frame_count)
    config = SpectrumChartConfig.from_mount(mount)

    renderer.create_plot(mount.element_id, [build_trace(config, series)], build_layout(config), dict(RENDER_CONFIG))
    if frames:
        renderer.register_frames(mount.element_id, [frame_payload(frame) for frame in frames])
        renderer.play_frames(mount.element_id, [frame.name for frame in frames], animation_options(config))
        status: PipelineStatus = "animated"
    else:
        renderer.extend_trace(
            mount.element_id,
            {"x": [point.frequency for point in series], "y": [point.value for point in series]},
            [0],
        )
        status = "extended"

    logger.info("Handed %d points in %d frames for #%s to the renderer.", len(series), len(frames), mount.element_id)
    return PipelineOutcome(status=status, series=series, frames=frames)
