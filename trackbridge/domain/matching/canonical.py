"""Conversion of native catalog records into CanonicalTrack.

Each catalog shape gets its own TypedDict and its own conversion function, and
``to_canonical`` dispatches on an explicit SourceFormat tag instead of sniffing
the payload. Missing optional fields fall back to documented defaults.
"""

from collections.abc import Callable, Mapping
from typing import Any, NotRequired, TypedDict

from trackbridge.domain.entities import CanonicalTrack, SourceFormat

from .normalization import parse_artists


class AppleMusicSongAttributes(TypedDict, total=False):
    """Subset of Apple Music catalog song attributes used for matching."""

    name: str
    artistName: str
    albumName: str
    durationInMillis: int
    isrc: str
    contentRating: str


class AppleMusicSong(TypedDict):
    """Apple Music catalog song resource."""

    id: NotRequired[str]
    type: NotRequired[str]
    attributes: NotRequired[AppleMusicSongAttributes]


class SpotifyArtist(TypedDict, total=False):
    name: str


class SpotifyAlbum(TypedDict, total=False):
    name: str


class SpotifyTrack(TypedDict, total=False):
    """Spotify Web API track object."""

    id: str
    name: str
    artists: list[SpotifyArtist]
    album: SpotifyAlbum
    duration_ms: int
    external_ids: dict[str, str]
    explicit: bool


class CanonicalRecord(TypedDict, total=False):
    """Flat record shape used by JSON fixtures and CLI input files."""

    id: str
    name: str
    artists: list[str] | str
    album_name: str
    duration_ms: int
    isrc: str
    explicit: bool


def _coerce_duration(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def _clean_isrc(value: Any) -> str | None:
    if not value or not isinstance(value, str):
        return None
    cleaned = value.strip().upper()
    return cleaned or None


def _clean_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def from_apple_music(raw: AppleMusicSong) -> CanonicalTrack:
    """Convert an Apple Music song resource.

    Apple Music credits all artists in a single ``artistName`` string, so it is
    parsed into an artist list.
    """
    attributes = _mapping(raw.get("attributes"))
    return CanonicalTrack(
        id=_clean_id(raw.get("id")),
        name=_text(attributes.get("name")),
        artists=parse_artists(_text(attributes.get("artistName"))),
        album_name=_text(attributes.get("albumName")),
        duration_ms=_coerce_duration(attributes.get("durationInMillis")),
        isrc=_clean_isrc(attributes.get("isrc")),
        explicit=attributes.get("contentRating") == "explicit",
    )


def from_spotify(raw: SpotifyTrack) -> CanonicalTrack:
    """Convert a Spotify track object."""
    artists = [
        _text(artist.get("name")).strip()
        for artist in raw.get("artists") or []
        if isinstance(artist, Mapping)
    ]
    return CanonicalTrack(
        id=_clean_id(raw.get("id")),
        name=_text(raw.get("name")),
        artists=list(dict.fromkeys(a for a in artists if a)),
        album_name=_text(_mapping(raw.get("album")).get("name")),
        duration_ms=_coerce_duration(raw.get("duration_ms")),
        isrc=_clean_isrc(_mapping(raw.get("external_ids")).get("isrc")),
        explicit=raw.get("explicit") is True,
    )


def from_canonical_record(raw: CanonicalRecord) -> CanonicalTrack:
    """Convert a flat record; ``artists`` may be a list or a credit string."""
    artists = raw.get("artists")
    if isinstance(artists, str):
        artist_list = parse_artists(artists)
    else:
        artist_list = list(
            dict.fromkeys(a.strip() for a in artists or [] if isinstance(a, str) and a.strip())
        )
    return CanonicalTrack(
        id=_clean_id(raw.get("id")),
        name=_text(raw.get("name")),
        artists=artist_list,
        album_name=_text(raw.get("album_name")),
        duration_ms=_coerce_duration(raw.get("duration_ms")),
        isrc=_clean_isrc(raw.get("isrc")),
        explicit=raw.get("explicit") is True,
    )


_CONVERTERS: dict[SourceFormat, Callable[[Any], CanonicalTrack]] = {
    SourceFormat.APPLE_MUSIC: from_apple_music,
    SourceFormat.SPOTIFY: from_spotify,
    SourceFormat.CANONICAL: from_canonical_record,
}


def to_canonical(raw: Mapping[str, Any], source_format: SourceFormat | str) -> CanonicalTrack:
    """Convert a native catalog record into a CanonicalTrack.

    Args:
        raw: Record in the shape named by ``source_format``
        source_format: SourceFormat tag or its string value

    Returns:
        Canonical track with defaults for every missing optional field

    Raises:
        ValueError: Unknown source format.
        TypeError: ``raw`` is not a mapping.
    """
    try:
        fmt = SourceFormat(source_format)
    except ValueError:
        raise ValueError(
            f"Unknown source format {source_format!r}; "
            f"expected one of {[f.value for f in SourceFormat]}"
        ) from None

    if not isinstance(raw, Mapping):
        raise TypeError(f"Expected a mapping for {fmt} record, got {type(raw).__name__}")

    return _CONVERTERS[fmt](raw)
