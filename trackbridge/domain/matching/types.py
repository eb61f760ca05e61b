"""Pure domain types for track resolution and scoring.

These types represent the core concepts in the matching domain with zero
external service dependencies. All of them are immutable: a retry produces a
new ResolutionOutcome rather than mutating an old one.
"""

from enum import StrEnum
from typing import Any

from attrs import define, field

from trackbridge.domain.entities import CanonicalTrack


class MatchMethod(StrEnum):
    """Resolution tier that produced a candidate."""

    ISRC = "ISRC"
    METADATA = "METADATA"


class Confidence(StrEnum):
    """Coarse confidence bucket used to drive review prompts."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ResolutionStatus(StrEnum):
    """Final classification of one source track."""

    MATCHED = "matched"
    NEEDS_REVIEW = "needs_review"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


@define(frozen=True, slots=True)
class ScoreEvidence:
    """Evidence used to calculate a composite match score.

    Captures per-component similarities and the points each component
    contributed, so a reviewer can see why a candidate scored what it did.
    """

    title_similarity: float = 0.0
    artist_similarity: float = 0.0
    album_similarity: float = 0.0
    duration_diff_ms: int | None = None
    title_points: float = 0.0
    artist_points: float = 0.0
    album_points: float = 0.0
    duration_points: float = 0.0
    final_score: int = 0

    def as_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reports."""
        return {
            "title_similarity": round(self.title_similarity, 2),
            "artist_similarity": round(self.artist_similarity, 2),
            "album_similarity": round(self.album_similarity, 2),
            "duration_diff_ms": self.duration_diff_ms,
            "title_points": round(self.title_points, 2),
            "artist_points": round(self.artist_points, 2),
            "album_points": round(self.album_points, 2),
            "duration_points": round(self.duration_points, 2),
            "final_score": self.final_score,
        }


@define(frozen=True, slots=True)
class MatchCandidate:
    """One possible target-catalog track for a source track."""

    track: CanonicalTrack
    method: MatchMethod
    confidence: Confidence
    score: int = field(default=0)
    match_time_ms: int = 0
    evidence: ScoreEvidence | None = None

    @score.validator
    def _check_score(self, attribute, value):
        if not 0 <= value <= 100:
            raise ValueError(f"score must be within 0..100, got {value}")

    def as_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reports."""
        return {
            "track": self.track.as_dict(),
            "method": str(self.method),
            "confidence": str(self.confidence),
            "score": self.score,
            "match_time_ms": self.match_time_ms,
            "evidence": self.evidence.as_dict() if self.evidence else None,
        }


@define(frozen=True, slots=True)
class ResolutionOutcome:
    """Result of resolving a single source track against a target catalog."""

    source_track: CanonicalTrack
    status: ResolutionStatus
    primary: MatchCandidate | None = None
    alternatives: tuple[MatchCandidate, ...] = field(factory=tuple, converter=tuple)
    error: str | None = None

    @property
    def is_accepted(self) -> bool:
        """True when a primary candidate was accepted (auto or for review)."""
        return self.primary is not None and self.status in (
            ResolutionStatus.MATCHED,
            ResolutionStatus.NEEDS_REVIEW,
        )

    @property
    def reason(self) -> str | None:
        """Short machine-readable reason for unavailable/error outcomes."""
        if self.status is ResolutionStatus.UNAVAILABLE:
            return "not_found"
        if self.status is ResolutionStatus.ERROR:
            return "error"
        return None

    def as_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reports."""
        if isinstance(self.source_track, CanonicalTrack):
            source = self.source_track.as_dict()
        else:
            source = {"raw": repr(self.source_track)}
        return {
            "source_track": source,
            "status": str(self.status),
            "match": self.primary.as_dict() if self.primary else None,
            "alternatives": [alt.as_dict() for alt in self.alternatives],
            "reason": self.reason,
            "error": self.error,
        }

    @classmethod
    def unavailable(cls, source_track: CanonicalTrack) -> "ResolutionOutcome":
        return cls(source_track=source_track, status=ResolutionStatus.UNAVAILABLE)

    @classmethod
    def failed(cls, source_track: Any, error: str) -> "ResolutionOutcome":
        return cls(source_track=source_track, status=ResolutionStatus.ERROR, error=error)
