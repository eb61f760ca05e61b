"""Track-related domain entities.

Catalog-agnostic track representation with zero external service dependencies.
Raw catalog payloads never cross the normalization boundary; everything past it
works on CanonicalTrack.
"""

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

from attrs import define, field, validators


class SourceFormat(StrEnum):
    """Native record shapes the normalizer understands."""

    APPLE_MUSIC = "apple_music"
    SPOTIFY = "spotify"
    CANONICAL = "canonical"


def _to_artist_tuple(value: Iterable[str] | None) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    return tuple(value)


def _to_duration(value: int | None) -> int:
    if value is None:
        return 0
    return max(0, int(value))


@define(frozen=True, slots=True)
class CanonicalTrack:
    """Immutable, catalog-agnostic track record.

    Artist order matters for "primary artist" semantics; the full tuple is kept
    for multi-artist comparisons and display.
    """

    id: str | None = field(default=None)
    name: str = field(default="", converter=lambda v: v or "")
    artists: tuple[str, ...] = field(factory=tuple, converter=_to_artist_tuple)
    album_name: str = field(default="", converter=lambda v: v or "")
    duration_ms: int = field(default=0, converter=_to_duration)
    isrc: str | None = field(default=None)
    explicit: bool = field(default=False, validator=validators.instance_of(bool))

    @property
    def primary_artist(self) -> str:
        """First credited artist, or an empty string."""
        return self.artists[0] if self.artists else ""

    @property
    def featured_artists(self) -> tuple[str, ...]:
        """Every credited artist after the primary one."""
        return self.artists[1:]

    def display_name(self) -> str:
        """Human-readable 'Artist - Title' label for logs and progress."""
        if self.primary_artist:
            return f"{self.primary_artist} - {self.name}"
        return self.name

    def as_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "artists": list(self.artists),
            "album_name": self.album_name,
            "duration_ms": self.duration_ms,
            "isrc": self.isrc,
            "explicit": self.explicit,
        }
