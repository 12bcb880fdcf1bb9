"""Series parsing for delimited text and JSON documents.

Format ambiguity is resolved by permissive structural inspection:

- delimited text infers the column separator per line (comma, tab, or runs of
  whitespace),
- JSON documents may be a bare array or an object wrapping the rows in a
  `data` or `points` field.

Malformed rows are dropped rather than rejected; partial/noisy input is
expected. Only a JSON document that cannot be decoded at all is an error.
"""

from __future__ import annotations

import json
import re
from typing import Any, Final

from spectrum.points import Point, Series, normalize_points

_LINE_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"\r?\n")
_CELL_SPLIT_RE: Final[re.Pattern[str]] = re.compile(r"[,\t]\s*|\s+")


class MalformedDocument(ValueError):
    """Raised when a structured payload cannot be deserialized."""


def parse_delimited(text: str) -> Series:
    """Parse comma-, tab-, or whitespace-delimited rows into a Series.

    Args:
        text: Raw delimited text, one `frequency value` pair per line.

    Returns:
        Valid points in input order. Blank input yields an empty Series.
    """

    trimmed = text.strip()
    if not trimmed:
        return ()

    rows: list[list[str]] = []
    for line in _LINE_SPLIT_RE.split(trimmed):
        cells = [cell.strip() for cell in _CELL_SPLIT_RE.split(line.strip())]
        rows.append([cell for cell in cells if cell])
    return normalize_points(rows)


def parse_structured(text: str) -> Series:
    """Parse a JSON document into a Series.

    Args:
        text: JSON text holding either an array of point candidates or an
            object with a `data` or `points` array.

    Returns:
        Valid points in input order.

    Raises:
        MalformedDocument: When `text` is not valid JSON or nests too deeply to decode.
    """

    try:
        document = json.loads(text)
    except (TypeError, ValueError, RecursionError) as exc:
        raise MalformedDocument(f"Structured payload is not valid JSON: {exc}") from exc
    return normalize_points(_document_rows(document))


def _document_rows(document: Any) -> list[Any]:
    """Locate the raw point list inside a decoded document."""

    if isinstance(document, list):
        return document
    if not isinstance(document, dict):
        return []

    rows = document.get("data")
    if rows is None:
        rows = document.get("points")
    if not isinstance(rows, list):
        return []
    return rows


def sort_series(series: Series) -> Series:
    """Return `series` sorted ascending by frequency (stable for ties)."""

    return tuple(sorted(series, key=_frequency_key))


def _frequency_key(point: Point) -> float:
    return point.frequency
