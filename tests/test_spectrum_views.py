"""Integration tests for the spectrum chart views."""

from __future__ import annotations

import json
import urllib.request

import pytest

pytestmark = pytest.mark.integration

MOUNTS = """
fallback_data:
  - [5, 0.5]
  - [1, 0.1]
charts:
  embedded:
    element_id: spectrum-embedded
    attributes:
      chart-title: Embedded sweep
      band-highlights: "0:10:Low|bad|30:40:High"
    embedded: '[[200, 0.6], [100, 0.5]]'
  remote:
    element_id: spectrum-remote
    attributes:
      source: /static/plots/remote.csv
  fallback:
    element_id: spectrum-fallback
"""


def test_spectrum_chart_renders_commands(client, mounts_file) -> None:
    """Render the chart page with the recorded Plotly commands."""

    mounts_file(MOUNTS)
    response = client.get("/spectrum/embedded/")

    assert response.status_code == 200
    assert response.context["status"] == "animated"
    assert response.context["point_count"] == 2
    assert response.context["page_title"] == "Embedded sweep"
    methods = [command["method"] for command in response.context["commands"]]
    assert methods == ["newPlot", "addFrames", "animate"]

    content = response.content.decode("utf-8")
    assert 'id="spectrum-embedded"' in content
    assert 'id="spectrum-commands"' in content
    assert "/static/plots/spectrum.js" in content


def test_spectrum_handoff_json(client, mounts_file) -> None:
    """Return the handoff as JSON with sorted frames."""

    mounts_file(MOUNTS)
    payload = client.get("/spectrum/embedded/handoff.json").json()

    assert payload["status"] == "animated"
    assert payload["element_id"] == "spectrum-embedded"
    assert payload["frame_names"] == ["frame-1", "frame-2"]
    layout = payload["commands"][0]["args"][1]
    assert [note["text"] for note in layout["annotations"]] == ["Low", "High"]
    frames = payload["commands"][1]["args"][0]
    assert frames[-1]["data"][0]["x"] == [100.0, 200.0]


def test_spectrum_chart_uses_fallback_data(client, mounts_file) -> None:
    """Use the declared fallback data for mounts without their own data."""

    mounts_file(MOUNTS)
    payload = client.get("/spectrum/fallback/handoff.json").json()

    assert payload["status"] == "animated"
    assert payload["point_count"] == 2
    assert payload["commands"][0]["args"][0][0]["x"] == [1.0]


def test_spectrum_chart_resolves_relative_sources(client, mounts_file, monkeypatch) -> None:
    """Fetch relative source locators against the current host."""

    from plots.sources import FetchedSource

    requested: list[str] = []

    def fake_fetch(url: str, *, timeout: float) -> FetchedSource:
        requested.append(url)
        return FetchedSource(text="300\t3\n100\t1", content_type="text/csv")

    monkeypatch.setattr("plots.views.fetch_source", fake_fetch)
    mounts_file(MOUNTS)
    payload = client.get("/spectrum/remote/handoff.json").json()

    assert requested == ["http://testserver/static/plots/remote.csv"]
    assert payload["point_count"] == 2
    assert payload["frame_names"] == ["frame-1", "frame-2"]


def test_spectrum_chart_remote_failure_renders_empty_region(client, mounts_file, monkeypatch) -> None:
    """Render an empty chart region when the remote source fails."""

    def fake_urlopen(request, timeout):
        raise OSError("connection refused")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    mounts_file(MOUNTS)
    response = client.get("/spectrum/remote/")

    assert response.status_code == 200
    assert response.context["status"] == "no_data"
    assert response.context["commands"] == []


def test_spectrum_chart_unknown_slug_renders_empty_page(client, mounts_file) -> None:
    """Render the page without a chart when the mount does not exist."""

    mounts_file(MOUNTS)
    response = client.get("/spectrum/unknown/")

    assert response.status_code == 200
    assert response.context["status"] == "mount_missing"
    assert response.context["mount"] is None
    assert "data-plotly-spectrum" not in response.content.decode("utf-8")


def test_spectrum_chart_without_renderer(client, mounts_file, settings) -> None:
    """Skip the handoff when no Plotly script is configured."""

    settings.SPECTRUM_PLOTLY_JS_URL = ""
    mounts_file(MOUNTS)
    payload = client.get("/spectrum/embedded/handoff.json").json()

    assert payload["status"] == "renderer_missing"
    assert payload["commands"] == []


def test_spectrum_chart_respects_frame_budget(client, mounts_file, settings) -> None:
    """Apply SPECTRUM_TARGET_FRAME_COUNT to the frame schedule."""

    settings.SPECTRUM_TARGET_FRAME_COUNT = 1
    mounts_file(MOUNTS)
    payload = client.get("/spectrum/embedded/handoff.json").json()

    assert payload["frame_names"] == ["frame-2"]


def test_bundled_mounts_file_is_valid() -> None:
    """Load the mount definitions shipped with the project."""

    from django.conf import settings as django_settings

    from plots.mounts import load_mount_registry

    registry = load_mount_registry(django_settings.BASE_DIR / "spectrum_mounts.yml")
    assert {"overview", "remote", "fallback"} <= set(registry.charts)
    assert registry.fallback_data

    overview = registry.get("overview")
    assert overview is not None
    assert json.loads(overview.embedded_document or "null")["points"]
