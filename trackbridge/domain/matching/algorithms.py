"""Pure algorithms for track similarity and confidence scoring.

These functions contain no I/O and implement the core business logic for
deciding how well two canonical tracks match across catalogs.
"""

import math

from attrs import define
from rapidfuzz.distance import Levenshtein

from trackbridge.domain.entities import CanonicalTrack

from .normalization import normalize_for_comparison
from .types import Confidence, ScoreEvidence


@define(frozen=True, slots=True)
class MatchScoreWeights:
    """Component weights for the composite score.

    Title and artist dominate because they are the most discriminating and most
    reliably populated fields across catalogs; duration only breaks ties.
    """

    title: float = 40.0
    artist: float = 35.0
    album: float = 15.0
    duration: float = 10.0
    duration_close_ms: int = 3000
    duration_near_ms: int = 5000

    @property
    def duration_near_points(self) -> float:
        return self.duration / 2


DEFAULT_WEIGHTS = MatchScoreWeights()


@define(frozen=True, slots=True)
class ConfidenceThresholds:
    """Score cutoffs for the confidence buckets."""

    accept: int = 80
    high: int = 90


DEFAULT_THRESHOLDS = ConfidenceThresholds()


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with unit cost insert/delete/substitute."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str | None, b: str | None) -> float:
    """Edit-distance similarity in [0, 1] computed over normalized strings."""
    a_norm = normalize_for_comparison(a)
    b_norm = normalize_for_comparison(b)

    if a_norm == b_norm:
        return 1.0
    if not a_norm or not b_norm:
        return 0.0

    max_len = max(len(a_norm), len(b_norm))
    return 1.0 - levenshtein_distance(a_norm, b_norm) / max_len


def _field_similarity(a: str, b: str) -> float:
    # Missing on either side contributes nothing
    if not a or not b:
        return 0.0
    return string_similarity(a, b)


def calculate_match_score(
    source: CanonicalTrack,
    candidate: CanonicalTrack,
    weights: MatchScoreWeights = DEFAULT_WEIGHTS,
) -> tuple[int, ScoreEvidence]:
    """
    Calculate the composite 0-100 match score between two tracks.

    Args:
        source: Track from the source catalog
        candidate: Track returned by the target catalog
        weights: Component weights and duration windows

    Returns:
        Tuple of (score, evidence)
    """
    title_similarity = _field_similarity(source.name, candidate.name)
    artist_similarity = _field_similarity(source.primary_artist, candidate.primary_artist)
    album_similarity = _field_similarity(source.album_name, candidate.album_name)

    title_points = title_similarity * weights.title
    artist_points = artist_similarity * weights.artist
    album_points = album_similarity * weights.album

    duration_diff_ms: int | None = None
    duration_points = 0.0
    if source.duration_ms > 0 and candidate.duration_ms > 0:
        duration_diff_ms = abs(source.duration_ms - candidate.duration_ms)
        if duration_diff_ms <= weights.duration_close_ms:
            duration_points = weights.duration
        elif duration_diff_ms <= weights.duration_near_ms:
            duration_points = weights.duration_near_points

    total = title_points + artist_points + album_points + duration_points
    # Round half up, then clamp
    final_score = max(0, min(100, math.floor(total + 0.5)))

    evidence = ScoreEvidence(
        title_similarity=title_similarity,
        artist_similarity=artist_similarity,
        album_similarity=album_similarity,
        duration_diff_ms=duration_diff_ms,
        title_points=title_points,
        artist_points=artist_points,
        album_points=album_points,
        duration_points=duration_points,
        final_score=final_score,
    )
    return final_score, evidence


def classify_confidence(
    score: int, thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS
) -> Confidence:
    """Map a numeric score onto a confidence bucket."""
    if score >= thresholds.high:
        return Confidence.HIGH
    if score >= thresholds.accept:
        return Confidence.MEDIUM
    return Confidence.LOW
