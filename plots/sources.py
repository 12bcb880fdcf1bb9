"""Data source resolution for spectrum charts.

Resolution is an ordered list of providers; the first provider that applies
wins:

1. the mount's embedded JSON block,
2. the mount's `source` locator (fetched over HTTP),
3. explicitly supplied fallback data.

Load failures are converted into log diagnostics and an empty Series so a bad
source never breaks the page.
"""

from __future__ import annotations

import codecs
import logging
import urllib.error
import urllib.request
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol

from spectrum.points import Series, normalize_points
from spectrum.series import MalformedDocument, parse_delimited, parse_structured

from .mounts import ChartMount

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0


class SourceUnavailable(RuntimeError):
    """Raised when a remote source cannot be fetched or answers with an error."""


@dataclass(frozen=True, slots=True)
class FetchedSource:
    """A fetched remote payload.

    Attributes:
        text: Decoded response body.
        content_type: Declared media type (`Content-Type` header), possibly empty.
    """

    text: str
    content_type: str = ""

    @property
    def is_structured(self) -> bool:
        """Return True when the declared media type indicates JSON."""

        return "json" in self.content_type.lower()


Fetcher = Callable[[str], FetchedSource]


def fetch_source(url: str, *, timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS) -> FetchedSource:
    """Fetch a remote data source with a generic GET.

    Args:
        url: Absolute URL to retrieve.
        timeout: Socket timeout in seconds.

    Returns:
        FetchedSource with the decoded body and declared media type.

    Raises:
        SourceUnavailable: On transport failure or a non-success response.
    """

    try:
        request = urllib.request.Request(
            url,
            headers={
                "User-Agent": "spectrumsite (spectrum data loader)",
                "Accept": "application/json, text/csv, text/plain;q=0.9, */*;q=0.5",
            },
        )
        with urllib.request.urlopen(request, timeout=timeout) as response:
            status = getattr(response, "status", 200)
            if not 200 <= status < 300:
                raise SourceUnavailable(f"Network error: {status}")
            content_type = response.headers.get("Content-Type", "")
            charset = "utf-8"
            if "charset=" in content_type:
                charset = content_type.split("charset=", 1)[1].split(";", 1)[0].strip() or "utf-8"
            try:
                codecs.lookup(charset)
            except LookupError:
                charset = "utf-8"
            return FetchedSource(
                text=response.read().decode(charset, errors="replace"),
                content_type=content_type,
            )
    except urllib.error.HTTPError as exc:
        raise SourceUnavailable(f"Network error: {exc.code}") from exc
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise SourceUnavailable(f"Failed to fetch {url}: {exc}") from exc


def parse_fetched(fetched: FetchedSource) -> Series:
    """Parse a fetched payload, choosing the parser from its media type.

    JSON media types use the structured parser; anything else, including a
    missing or unrecognized media type, is parsed as delimited text.
    """

    if fetched.is_structured:
        return parse_structured(fetched.text)
    return parse_delimited(fetched.text)


class SeriesProvider(Protocol):
    """One step of the resolution chain.

    `attempt` returns None when the provider does not apply to the mount,
    otherwise the (possibly empty) Series it produced.
    """

    label: ClassVar[str]

    def attempt(self, mount: ChartMount) -> Series | None: ...


@dataclass(frozen=True, slots=True)
class EmbeddedDocumentProvider:
    """Read points from the mount's embedded JSON block."""

    label: ClassVar[str] = "embedded JSON block"

    def attempt(self, mount: ChartMount) -> Series | None:
        if mount.embedded_document is None:
            return None
        try:
            return parse_structured(mount.embedded_document)
        except MalformedDocument as exc:
            logger.error("Failed to parse inline JSON data for #%s: %s", mount.element_id, exc)
            return ()


@dataclass(frozen=True, slots=True)
class RemoteSourceProvider:
    """Fetch points from the mount's `source` locator.

    Args:
        fetcher: Callable taking a URL and returning a FetchedSource.
    """

    label: ClassVar[str] = "source attribute"

    fetcher: Fetcher = fetch_source

    def attempt(self, mount: ChartMount) -> Series | None:
        url = mount.source
        if url is None:
            return None
        try:
            return parse_fetched(self.fetcher(url))
        except (SourceUnavailable, MalformedDocument) as exc:
            logger.error("Failed to load remote data for #%s from %s: %s", mount.element_id, url, exc)
            return ()


@dataclass(frozen=True, slots=True)
class FallbackDataProvider:
    """Normalize explicitly supplied fallback point candidates.

    Args:
        points: Raw point candidates, or None when no fallback was provided.
    """

    label: ClassVar[str] = "fallback data"

    points: Sequence[Any] | None = None

    def attempt(self, mount: ChartMount) -> Series | None:
        if not isinstance(self.points, (list, tuple)):
            return None
        return normalize_points(self.points)


class DataSourceResolver:
    """Resolve a mount's Series from the first applicable provider.

    Args:
        providers: Explicit provider chain. Defaults to embedded, remote, then
            fallback.
        fallback_points: Raw point candidates for the default fallback provider.
        fetcher: Fetch callable for the default remote provider.
    """

    def __init__(
        self,
        *,
        providers: Sequence[SeriesProvider] | None = None,
        fallback_points: Sequence[Any] | None = None,
        fetcher: Fetcher = fetch_source,
    ) -> None:
        if providers is None:
            providers = (
                EmbeddedDocumentProvider(),
                RemoteSourceProvider(fetcher=fetcher),
                FallbackDataProvider(points=fallback_points),
            )
        self.providers: tuple[SeriesProvider, ...] = tuple(providers)

    def resolve(self, mount: ChartMount) -> Series:
        """Return the Series for `mount`; empty when nothing applies or loading fails."""

        for provider in self.providers:
            series = provider.attempt(mount)
            if series is not None:
                logger.debug("Resolved %d points for #%s from %s.", len(series), mount.element_id, provider.label)
                return series

        checked = ", ".join(provider.label for provider in self.providers)
        logger.error("No data found for #%s. Checked: %s.", mount.element_id, checked)
        return ()
