"""In-memory target catalog.

Serves ISRC lookups and free-text searches over a fixed list of canonical
tracks, typically loaded from a JSON export of the target service. Used by the
CLI and as a realistic test double for the resolver.
"""

from collections.abc import Iterable, Mapping
import json
from pathlib import Path
from typing import Any

from attrs import define, field
from rapidfuzz import fuzz
from toolz import groupby

from trackbridge.config import get_logger
from trackbridge.domain.entities import CanonicalTrack, SourceFormat
from trackbridge.domain.matching import normalize_search_term, to_canonical

logger = get_logger(__name__).bind(service="catalogs")

# Minimum token-set ratio for a catalog track to appear in search results
MIN_SEARCH_RATIO = 60.0


def _search_text(track: CanonicalTrack) -> str:
    return normalize_search_term(f"{track.name} {' '.join(track.artists)}")


@define(slots=True)
class InMemoryCatalog:
    """TargetCatalog over a list of canonical tracks.

    Attributes:
        tracks: Catalog contents in catalog order
        min_search_ratio: Cut-off for ``search_by_text`` relevance
    """

    tracks: tuple[CanonicalTrack, ...] = field(factory=tuple, converter=tuple)
    min_search_ratio: float = MIN_SEARCH_RATIO
    _by_isrc: dict[str, list[CanonicalTrack]] = field(init=False, factory=dict)
    _search_index: list[tuple[str, CanonicalTrack]] = field(init=False, factory=list)

    def __attrs_post_init__(self) -> None:
        self._by_isrc = groupby(
            lambda t: t.isrc.strip().upper(), (t for t in self.tracks if t.isrc)
        )
        self._search_index = [(_search_text(t), t) for t in self.tracks]

    def __len__(self) -> int:
        return len(self.tracks)

    async def lookup_by_isrc(self, isrc: str, storefront: str) -> list[CanonicalTrack]:
        """Return every catalog track carrying ``isrc``, in catalog order."""
        return list(self._by_isrc.get(isrc.strip().upper(), []))

    async def search_by_text(
        self, term: str, storefront: str, limit: int
    ) -> list[CanonicalTrack]:
        """Rank catalog tracks by token-set similarity to ``term``."""
        query = normalize_search_term(term)
        if not query or limit <= 0:
            return []

        scored = [
            (fuzz.token_set_ratio(query, text), position, track)
            for position, (text, track) in enumerate(self._search_index)
        ]
        hits = [s for s in scored if s[0] >= self.min_search_ratio]
        hits.sort(key=lambda s: (-s[0], s[1]))
        return [track for _, _, track in hits[:limit]]

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        source_format: SourceFormat | str = SourceFormat.CANONICAL,
    ) -> "InMemoryCatalog":
        """Build a catalog from raw service records."""
        return cls(tracks=[to_canonical(r, source_format) for r in records])

    @classmethod
    def from_json_file(
        cls,
        path: Path | str,
        source_format: SourceFormat | str = SourceFormat.CANONICAL,
    ) -> "InMemoryCatalog":
        """Load a catalog from a JSON file holding a list of records.

        A top-level object with a ``data`` or ``tracks`` list is accepted too,
        matching the shape of paginated service responses.
        """
        records = load_records(path)
        catalog = cls.from_records(records, source_format)
        logger.info("Loaded {} catalog tracks from {}", len(catalog), path)
        return catalog


def load_records(path: Path | str) -> list[dict[str, Any]]:
    """Read a list of raw track records from a JSON file."""
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        for key in ("data", "tracks", "items"):
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break

    if not isinstance(payload, list):
        raise ValueError(f"{path}: expected a JSON list of track records")
    return payload
