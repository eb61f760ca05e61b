"""Error taxonomy for track resolution.

Lookup failures stay inside the resolver, resolution failures become per-track
error outcomes, and only configuration defects escape a batch.
"""


class TrackbridgeError(Exception):
    """Base class for all trackbridge errors."""


class CatalogLookupError(TrackbridgeError):
    """A single catalog call failed (network, timeout, unparseable response)."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class BatchConfigurationError(TrackbridgeError, ValueError):
    """The batch cannot run at all, e.g. the target catalog is unusable."""
