"""Highlighted frequency bands parsed from a pipe-delimited token list.

Token format: `start:end:label`, joined with `|` (e.g. `0:10:Low|30:40:High`).
The label is optional. Tokens with non-numeric or non-finite bounds are
skipped individually; one bad token never invalidates the others.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from spectrum.points import coerce_number


@dataclass(frozen=True, slots=True)
class Band:
    """A decorative frequency interval.

    Attributes:
        start: Lower bound on the frequency axis.
        end: Upper bound on the frequency axis.
        label: Optional text annotation shown above the band.
    """

    start: float
    end: float
    label: str | None = None

    @property
    def midpoint(self) -> float:
        """Return the centre of the band (annotation anchor)."""

        return (self.start + self.end) / 2


def parse_band_token(token: str) -> Band | None:
    """Parse a single `start:end:label` token, returning None when invalid."""

    parts = [part.strip() for part in token.split(":", 2)]
    start = coerce_number(parts[0])
    end = coerce_number(parts[1]) if len(parts) > 1 else math.nan
    if not (math.isfinite(start) and math.isfinite(end)):
        return None
    label = parts[2] if len(parts) > 2 and parts[2] else None
    return Band(start=start, end=end, label=label)


def parse_band_highlights(raw: str | None) -> tuple[Band, ...]:
    """Parse a `|`-delimited band specification into Bands.

    Args:
        raw: Band specification string, or None when not configured.

    Returns:
        Valid bands in declaration order.
    """

    if not raw:
        return ()
    bands: list[Band] = []
    for token in raw.split("|"):
        token = token.strip()
        if not token:
            continue
        band = parse_band_token(token)
        if band is not None:
            bands.append(band)
    return tuple(bands)
