"""Best-effort normalization of raw measurement records.

Raw records arrive in one of two encodings:

- pair-like: a list/tuple where element 0 is the frequency and element 1 the value,
- keyed: a mapping with `frequency`/`value` keys (or the `x`/`y` aliases).

Normalization never raises. Unsupported shapes return None and non-numeric
fields become NaN so callers can filter with `Point.is_valid`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A single (frequency, value) sample.

    Attributes:
        frequency: Position on the frequency axis.
        value: Measured value at `frequency`.
    """

    frequency: float
    value: float

    @property
    def is_valid(self) -> bool:
        """Return True when both fields are finite numbers."""

        return math.isfinite(self.frequency) and math.isfinite(self.value)


Series = tuple[Point, ...]


def coerce_number(raw: Any) -> float:
    """Coerce a raw field into a float, returning NaN when it is not numeric.

    Args:
        raw: Raw cell/field value.

    Returns:
        The parsed float, or NaN for missing, boolean, empty, or unparseable input.
    """

    if raw is None or isinstance(raw, bool):
        return math.nan
    if isinstance(raw, (int, float, Decimal)):
        try:
            return float(raw)
        except OverflowError:
            # Integers past float range; the finite check drops them.
            return math.inf
    if isinstance(raw, str):
        trimmed = raw.strip()
        if not trimmed:
            return math.nan
        try:
            return float(trimmed)
        except ValueError:
            return math.nan
    return math.nan


def normalize_point(raw: Any) -> Point | None:
    """Convert one raw record into a Point.

    Args:
        raw: A pair-like sequence or a keyed mapping.

    Returns:
        A Point (possibly holding NaN fields), or None for unsupported shapes.
    """

    if isinstance(raw, (list, tuple)):
        frequency = raw[0] if len(raw) > 0 else None
        value = raw[1] if len(raw) > 1 else None
        return Point(frequency=coerce_number(frequency), value=coerce_number(value))

    if isinstance(raw, Mapping):
        frequency = raw["frequency"] if "frequency" in raw else raw.get("x")
        value = raw["value"] if "value" in raw else raw.get("y")
        return Point(frequency=coerce_number(frequency), value=coerce_number(value))

    return None


def normalize_points(rows: Iterable[Any]) -> Series:
    """Normalize raw records and keep only valid points, preserving input order."""

    points: list[Point] = []
    for row in rows:
        point = normalize_point(row)
        if point is not None and point.is_valid:
            points.append(point)
    return tuple(points)
