"""Views that hand spectrum charts off to the browser renderer."""

from __future__ import annotations

from functools import partial
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render

from plots.mounts import ChartMount, MountRegistry, SpectrumChartConfig, load_mount_registry
from plots.pipeline import PipelineOutcome, run_spectrum_pipeline
from plots.presentation import DEFAULT_TITLE
from plots.renderers import PlotlyCommandRenderer, RendererCommand
from plots.sources import DataSourceResolver, fetch_source


def _mount_registry() -> MountRegistry:
    """Load the configured mount definitions."""

    return load_mount_registry(settings.SPECTRUM_MOUNTS_FILE)


def _absolute_mount(request: HttpRequest, mount: ChartMount | None) -> ChartMount | None:
    """Resolve a relative `source` locator against the current request."""

    if mount is None or mount.source is None:
        return mount
    return mount.with_source(request.build_absolute_uri(mount.source))


def _run_pipeline(request: HttpRequest, slug: str) -> tuple[ChartMount | None, PipelineOutcome, list[RendererCommand]]:
    """Run the spectrum pipeline for `slug` and return the recorded commands.

    Args:
        request: Current request (used to absolutize source locators).
        slug: Mount slug from the URL.

    Returns:
        Tuple of (mount or None, pipeline outcome, recorded renderer commands).
    """

    registry = _mount_registry()
    mount = _absolute_mount(request, registry.get(slug))
    resolver = DataSourceResolver(
        fallback_points=registry.fallback_data,
        fetcher=partial(fetch_source, timeout=settings.SPECTRUM_FETCH_TIMEOUT_SECONDS),
    )
    renderer = PlotlyCommandRenderer() if settings.SPECTRUM_PLOTLY_JS_URL else None
    outcome = run_spectrum_pipeline(
        mount,
        resolver=resolver,
        renderer=renderer,
        target_frame_count=settings.SPECTRUM_TARGET_FRAME_COUNT,
    )
    commands = renderer.commands if renderer is not None else []
    return mount, outcome, commands


def spectrum_chart(request: HttpRequest, slug: str) -> HttpResponse:
    """Render the page hosting one animated spectrum chart.

    A missing mount, missing renderer, or empty data set renders the page with
    an empty chart region rather than an error.
    """

    mount, outcome, commands = _run_pipeline(request, slug)
    config = SpectrumChartConfig.from_mount(mount) if mount is not None else SpectrumChartConfig()
    context: dict[str, Any] = {
        "slug": slug,
        "mount": mount,
        "page_title": config.title or DEFAULT_TITLE,
        "status": outcome.status,
        "point_count": len(outcome.series),
        "frame_count": len(outcome.frames),
        "commands": commands,
        "plotly_js_url": settings.SPECTRUM_PLOTLY_JS_URL,
    }
    return render(request, "plots/spectrum.html", context)


def spectrum_handoff(request: HttpRequest, slug: str) -> JsonResponse:
    """Return the renderer handoff for one chart as JSON."""

    mount, outcome, commands = _run_pipeline(request, slug)
    return JsonResponse(
        {
            "slug": slug,
            "element_id": mount.element_id if mount is not None else None,
            "status": outcome.status,
            "point_count": len(outcome.series),
            "frame_names": [frame.name for frame in outcome.frames],
            "commands": commands,
        }
    )
