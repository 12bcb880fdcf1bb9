"""Pytest fixtures shared across spectrum tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from plots.renderers import PlotlyCommandRenderer
from plots.sources import FetchedSource


@pytest.fixture
def renderer() -> PlotlyCommandRenderer:
    """Return a renderer that records Plotly commands."""

    return PlotlyCommandRenderer()


@pytest.fixture
def fake_fetcher() -> Callable[..., Callable[[str], FetchedSource]]:
    """Return a factory for fetchers that serve canned payloads and record URLs."""

    def factory(text: str, *, content_type: str = "", calls: list[str] | None = None) -> Callable[[str], FetchedSource]:
        def fetch(url: str) -> FetchedSource:
            if calls is not None:
                calls.append(url)
            return FetchedSource(text=text, content_type=content_type)

        return fetch

    return factory


@pytest.fixture
def mounts_file(tmp_path: Path, settings) -> Callable[[str], Path]:
    """Write a mount definitions file and point settings at it."""

    def write(content: str) -> Path:
        path = tmp_path / "spectrum_mounts.yml"
        path.write_text(content, encoding="utf-8")
        settings.SPECTRUM_MOUNTS_FILE = path
        return path

    return write


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request cycle or network IO.
    - `integration`: tests touching Django views, settings, checks, or subprocesses.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
