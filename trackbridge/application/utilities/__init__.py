"""Application utilities shared across use cases."""

from .progress import ProgressCallback, ProgressEvent, emit_progress
from .worker_pool import OrderedWorkerPool, PoolResult

__all__ = [
    "OrderedWorkerPool",
    "PoolResult",
    "ProgressCallback",
    "ProgressEvent",
    "emit_progress",
]
