"""Trackbridge domain layer - pure business logic with zero external service dependencies."""

from . import entities, matching
from .entities import CanonicalTrack, SourceFormat
from .matching import (
    Confidence,
    MatchCandidate,
    MatchMethod,
    ResolutionOutcome,
    ResolutionStatus,
    calculate_match_score,
    normalize_for_comparison,
    parse_artists,
    string_similarity,
    to_canonical,
)

__all__ = [
    # Modules
    "entities",
    "matching",
    # Key domain types
    "CanonicalTrack",
    "SourceFormat",
    "Confidence",
    "MatchCandidate",
    "MatchMethod",
    "ResolutionOutcome",
    "ResolutionStatus",
    # Core functions
    "calculate_match_score",
    "normalize_for_comparison",
    "parse_artists",
    "string_similarity",
    "to_canonical",
]
