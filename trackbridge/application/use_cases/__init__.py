"""Application use cases."""

from .resolve_batch import (
    BatchMatchResult,
    ResolveBatchCommand,
    ResolveBatchUseCase,
    resolve_batch,
)

__all__ = [
    "BatchMatchResult",
    "ResolveBatchCommand",
    "ResolveBatchUseCase",
    "resolve_batch",
]
