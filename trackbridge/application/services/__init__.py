"""Application services for track resolution."""

from .candidate_resolver import CandidateResolver, resolve_candidate

__all__ = [
    "CandidateResolver",
    "resolve_candidate",
]
