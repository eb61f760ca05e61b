"""Protocols for the collaborators of the resolution engine.

These protocols define contracts without depending on any implementation:
catalog access, diagnostics and progress delivery all belong to the caller.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from trackbridge.domain.entities import CanonicalTrack


@runtime_checkable
class TargetCatalog(Protocol):
    """Already-authenticated access to the catalog tracks are resolved into.

    Implementations own HTTP, credentials and transport-level retries. Both
    calls should be bounded in time and may return an empty list. Results may
    be raw records instead of CanonicalTracks when the catalog declares a
    ``source_format`` attribute naming their shape.
    """

    async def lookup_by_isrc(self, isrc: str, storefront: str) -> list[CanonicalTrack]:
        """Return every catalog track carrying the given ISRC."""
        ...

    async def search_by_text(
        self, term: str, storefront: str, limit: int
    ) -> list[CanonicalTrack]:
        """Return up to ``limit`` tracks for a free-text query, best first."""
        ...


class DiagnosticLogger(Protocol):
    """Logging sink injected into the engine."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def info(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, message: str, *args: Any, **kwargs: Any) -> None: ...

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None: ...


TrackScorer = Callable[[CanonicalTrack, CanonicalTrack], int]
