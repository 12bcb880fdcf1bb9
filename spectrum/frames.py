"""Progressive-reveal frame scheduling.

A frame is a named prefix snapshot of a sorted Series. The schedule is bounded
so a 10-point and a 100,000-point series both animate in at most
`target_frame_count + 1` frames.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from spectrum.points import Series

DEFAULT_TARGET_FRAME_COUNT: Final[int] = 90
FINAL_FRAME_NAME: Final[str] = "frame-final"


@dataclass(frozen=True, slots=True)
class Frame:
    """A named checkpoint revealing the first `len(cumulative_x)` points.

    Attributes:
        name: Stable frame name (`frame-<index>` or `frame-final`).
        cumulative_x: Frequencies of the revealed prefix.
        cumulative_y: Values of the revealed prefix.
    """

    name: str
    cumulative_x: tuple[float, ...]
    cumulative_y: tuple[float, ...]

    def __len__(self) -> int:
        return len(self.cumulative_x)


def frame_step(point_count: int, *, target_frame_count: int = DEFAULT_TARGET_FRAME_COUNT) -> int:
    """Return the number of points revealed per frame (never below 1)."""

    if target_frame_count < 1:
        raise ValueError(f"target_frame_count must be >= 1, got {target_frame_count}.")
    return max(1, math.ceil(point_count / target_frame_count))


def schedule_frames(
    series: Series,
    *,
    target_frame_count: int = DEFAULT_TARGET_FRAME_COUNT,
) -> tuple[Frame, ...]:
    """Compute the progressive-reveal frames for a sorted series.

    Args:
        series: Points already sorted by frequency.
        target_frame_count: Desired number of frames before the optional
            full-coverage frame is appended.

    Returns:
        Frames with strictly increasing cumulative lengths. The last frame
        always covers the whole series. Empty input yields an empty tuple.

    Raises:
        ValueError: When `target_frame_count` is below 1.
    """

    step = frame_step(len(series), target_frame_count=target_frame_count)
    if not series:
        return ()

    frequencies = tuple(point.frequency for point in series)
    values = tuple(point.value for point in series)

    frames = [
        Frame(name=f"frame-{index}", cumulative_x=frequencies[:index], cumulative_y=values[:index])
        for index in range(step, len(series) + 1, step)
    ]
    if not frames or len(frames[-1]) < len(series):
        frames.append(Frame(name=FINAL_FRAME_NAME, cumulative_x=frequencies, cumulative_y=values))
    return tuple(frames)
