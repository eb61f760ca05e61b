"""Track matching algorithms and types for cross-catalog track resolution."""

from .algorithms import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    ConfidenceThresholds,
    MatchScoreWeights,
    calculate_match_score,
    classify_confidence,
    levenshtein_distance,
    string_similarity,
)
from .canonical import (
    from_apple_music,
    from_canonical_record,
    from_spotify,
    to_canonical,
)
from .errors import BatchConfigurationError, CatalogLookupError, TrackbridgeError
from .normalization import normalize_for_comparison, normalize_search_term, parse_artists
from .protocols import DiagnosticLogger, TargetCatalog, TrackScorer
from .types import (
    Confidence,
    MatchCandidate,
    MatchMethod,
    ResolutionOutcome,
    ResolutionStatus,
    ScoreEvidence,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "DEFAULT_WEIGHTS",
    "BatchConfigurationError",
    "CatalogLookupError",
    "Confidence",
    "ConfidenceThresholds",
    "DiagnosticLogger",
    "MatchCandidate",
    "MatchMethod",
    "MatchScoreWeights",
    "ResolutionOutcome",
    "ResolutionStatus",
    "ScoreEvidence",
    "TargetCatalog",
    "TrackScorer",
    "TrackbridgeError",
    "calculate_match_score",
    "classify_confidence",
    "from_apple_music",
    "from_canonical_record",
    "from_spotify",
    "levenshtein_distance",
    "normalize_for_comparison",
    "normalize_search_term",
    "parse_artists",
    "string_similarity",
    "to_canonical",
]
