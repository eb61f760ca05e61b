"""Core domain entities representing music concepts."""

from .track import CanonicalTrack, SourceFormat

__all__ = [
    "CanonicalTrack",
    "SourceFormat",
]
