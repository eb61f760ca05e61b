"""
Progress events emitted by batch resolution.

Delivery (terminal bar, WebSocket, notifications) is the caller's concern: the
batch hands a ProgressEvent to a plain callback and never waits on it.
"""

from collections.abc import Callable
from typing import Any

from attrs import define


@define(frozen=True, slots=True)
class ProgressEvent:
    """Immutable per-track progress notification."""

    current: int
    total: int
    track_name: str = ""
    artist: str = ""

    @property
    def is_complete(self) -> bool:
        """True once every track has been reported."""
        return self.current >= self.total

    def as_dict(self) -> dict[str, Any]:
        return {
            "current": self.current,
            "total": self.total,
            "track": self.track_name,
            "artist": self.artist,
        }


ProgressCallback = Callable[[ProgressEvent], None]


def emit_progress(
    callback: ProgressCallback | None,
    event: ProgressEvent,
    logger: Any,
) -> None:
    """Fire a progress callback without letting it abort the caller.

    Exceptions raised by the callback are logged once and dropped; they are
    never retried.
    """
    if callback is None:
        return
    try:
        callback(event)
    except Exception as e:
        logger.warning(
            "Progress callback failed: {}",
            e,
            current=event.current,
            total=event.total,
        )
