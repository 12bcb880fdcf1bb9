"""Tests for mount definitions and chart configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from plots.mounts import (
    ChartMount,
    MountConfigError,
    SpectrumChartConfig,
    load_mount_registry,
    parse_mount_registry,
)

pytestmark = pytest.mark.unit


def test_load_mount_registry_reads_charts_and_fallback(tmp_path: Path) -> None:
    """Load charts, stringify attribute values, and keep fallback data."""

    path = tmp_path / "mounts.yml"
    path.write_text(
        "\n".join(
            [
                "fallback_data:",
                "  - [1, 2]",
                "charts:",
                "  sweep:",
                "    element_id: sweep-chart",
                "    attributes:",
                "      chart-title: Sweep",
                "      animation-duration: 40",
                "    embedded: '[[1, 2]]'",
                "  bare: {}",
            ]
        ),
        encoding="utf-8",
    )

    registry = load_mount_registry(path)

    sweep = registry.get("sweep")
    assert sweep == ChartMount(
        element_id="sweep-chart",
        attributes={"chart-title": "Sweep", "animation-duration": "40"},
        embedded_document="[[1, 2]]",
    )
    bare = registry.get("bare")
    assert bare is not None
    assert bare.element_id == "spectrum-bare"
    assert registry.get("missing") is None
    assert registry.fallback_data == ([1, 2],)


def test_load_mount_registry_missing_file_is_empty(tmp_path: Path) -> None:
    """Treat a missing definitions file as having no mounts."""

    registry = load_mount_registry(tmp_path / "absent.yml")
    assert dict(registry.charts) == {}
    assert registry.fallback_data is None


def test_load_mount_registry_rejects_invalid_yaml(tmp_path: Path) -> None:
    """Raise MountConfigError for unparseable YAML."""

    path = tmp_path / "mounts.yml"
    path.write_text("charts: [unclosed", encoding="utf-8")
    with pytest.raises(MountConfigError):
        load_mount_registry(path)


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "a", "mapping"],
        {"charts": ["sweep"]},
        {"charts": {"sweep": "nope"}},
        {"charts": {"sweep": {"attributes": ["chart-title"]}}},
        {"charts": {"sweep": {"attributes": {"colour": "red"}}}},
        {"charts": {"sweep": {"embedded": [[1, 2]]}}},
        {"fallback_data": {"x": 1}},
    ],
)
def test_parse_mount_registry_rejects_wrong_shapes(payload: object) -> None:
    """Reject payloads that do not match the mount file layout."""

    with pytest.raises(MountConfigError):
        parse_mount_registry(payload)


def test_chart_mount_ignores_blank_attributes() -> None:
    """Treat blank attribute values as unset."""

    mount = ChartMount(element_id="chart", attributes={"source": "  ", "chart-title": ""})
    assert mount.source is None
    assert SpectrumChartConfig.from_mount(mount).title is None


def test_chart_mount_with_source_returns_copy() -> None:
    """Replace the source locator without mutating the original mount."""

    mount = ChartMount(element_id="chart", attributes={"source": "/data.csv", "x-label": "f"})
    absolute = mount.with_source("https://example.com/data.csv")

    assert absolute.source == "https://example.com/data.csv"
    assert absolute.attribute("x-label") == "f"
    assert mount.source == "/data.csv"


def test_spectrum_chart_config_from_mount() -> None:
    """Map mount attributes onto config fields."""

    mount = ChartMount(
        element_id="chart",
        attributes={
            "chart-title": "Sweep",
            "x-label": "f",
            "y-label": "dB",
            "line-color": "red",
            "band-highlights": "0:1:A",
            "animation-duration": "15",
        },
    )
    assert SpectrumChartConfig.from_mount(mount) == SpectrumChartConfig(
        title="Sweep",
        x_label="f",
        y_label="dB",
        line_color="red",
        band_highlights="0:1:A",
        frame_duration_ms=15.0,
    )
