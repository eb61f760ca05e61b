"""Batch track resolution use case.

Applies the CandidateResolver to an ordered sequence of source tracks and
aggregates the outcomes:
- Command pattern for validated batch context
- Failures contained per track; only configuration defects abort the batch
- Input order preserved in the result regardless of completion order
"""

import asyncio
from collections.abc import Sequence
import inspect
import time
from typing import Any

from attrs import define, field

from trackbridge.application.services.candidate_resolver import CandidateResolver
from trackbridge.application.utilities.progress import (
    ProgressCallback,
    ProgressEvent,
    emit_progress,
)
from trackbridge.application.utilities.worker_pool import OrderedWorkerPool
from trackbridge.config import get_logger, settings
from trackbridge.domain.entities import CanonicalTrack
from trackbridge.domain.matching import (
    BatchConfigurationError,
    DiagnosticLogger,
    ResolutionOutcome,
    ResolutionStatus,
    TargetCatalog,
)

logger = get_logger(__name__)


def _check_catalog(catalog: Any) -> None:
    if catalog is None:
        raise BatchConfigurationError("Target catalog must be provided")
    missing = [
        name
        for name in ("lookup_by_isrc", "search_by_text")
        if not callable(getattr(catalog, name, None))
    ]
    if missing:
        raise BatchConfigurationError(
            f"Target catalog {type(catalog).__name__} is missing: {', '.join(missing)}"
        )
    not_async = [
        name
        for name in ("lookup_by_isrc", "search_by_text")
        if not inspect.iscoroutinefunction(getattr(catalog, name))
    ]
    if not_async:
        raise BatchConfigurationError(
            f"Target catalog {type(catalog).__name__} must define async methods: "
            f"{', '.join(not_async)}"
        )


@define(frozen=True, slots=True)
class ResolveBatchCommand:
    """Command for resolving a batch of source tracks.

    Encapsulates the tracks, the target catalog capability and the optional
    progress, cancellation and concurrency controls.
    """

    source_tracks: Sequence[CanonicalTrack]
    catalog: TargetCatalog
    storefront: str | None = None
    on_progress: ProgressCallback | None = None
    stop_event: asyncio.Event | None = None
    concurrency: int | None = None

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        if self.source_tracks is None:
            raise BatchConfigurationError("source_tracks must be a sequence, got None")
        _check_catalog(self.catalog)
        if self.concurrency is not None and self.concurrency < 1:
            raise BatchConfigurationError(
                f"concurrency must be >= 1, got {self.concurrency}"
            )
        if self.on_progress is not None and not callable(self.on_progress):
            raise BatchConfigurationError("on_progress must be callable")


@define(frozen=True, slots=True)
class BatchMatchResult:
    """Aggregated outcomes of a batch, one per processed track in input order."""

    outcomes: tuple[ResolutionOutcome, ...] = field(factory=tuple, converter=tuple)
    total: int = 0
    cancelled: bool = False
    pending: tuple[CanonicalTrack, ...] = field(factory=tuple, converter=tuple)
    execution_time_ms: int = 0

    def _with_status(self, *statuses: ResolutionStatus) -> list[ResolutionOutcome]:
        return [o for o in self.outcomes if o.status in statuses]

    @property
    def matched(self) -> list[ResolutionOutcome]:
        """Tracks with an accepted primary candidate, including those flagged for review."""
        return [o for o in self.outcomes if o.is_accepted]

    @property
    def needs_review(self) -> list[ResolutionOutcome]:
        """Medium-confidence subset of ``matched``."""
        return self._with_status(ResolutionStatus.NEEDS_REVIEW)

    @property
    def unavailable(self) -> list[ResolutionOutcome]:
        return self._with_status(ResolutionStatus.UNAVAILABLE)

    @property
    def errors(self) -> list[ResolutionOutcome]:
        return self._with_status(ResolutionStatus.ERROR)

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def match_rate(self) -> float:
        """Matched share of processed tracks as percentage."""
        if not self.outcomes:
            return 0.0
        return round(len(self.matched) / len(self.outcomes) * 100, 2)

    def summary(self) -> dict[str, Any]:
        """Bucket counts for logs and reports."""
        return {
            "total": self.total,
            "processed": self.processed,
            "matched": len(self.matched),
            "needs_review": len(self.needs_review),
            "unavailable": len(self.unavailable),
            "errors": len(self.errors),
            "cancelled": self.cancelled,
            "match_rate": self.match_rate,
            "execution_time_ms": self.execution_time_ms,
        }

    def as_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready report."""
        return {
            "summary": self.summary(),
            "matched": [o.as_dict() for o in self.matched],
            "unavailable": [o.as_dict() for o in self.unavailable],
            "errors": [o.as_dict() for o in self.errors],
            "pending": [t.as_dict() for t in self.pending],
        }


@define(slots=True)
class ResolveBatchUseCase:
    """Use case applying candidate resolution to a whole batch.

    The use case owns the aggregate collection of outcomes for a session; the
    resolver it drives keeps no cross-track state.
    """

    resolver: CandidateResolver = field(factory=CandidateResolver)
    logger: DiagnosticLogger = field(factory=lambda: get_logger(__name__))
    default_concurrency: int = field(factory=lambda: settings.batch.concurrency)
    progress_log_frequency: int = field(
        factory=lambda: settings.batch.progress_log_frequency
    )

    async def execute(self, command: ResolveBatchCommand) -> BatchMatchResult:
        """Execute batch resolution.

        Args:
            command: Validated batch command.

        Returns:
            BatchMatchResult with outcomes in input order.
        """
        start_time = time.perf_counter()
        tracks = list(command.source_tracks)
        total = len(tracks)

        if not tracks:
            self.logger.info("No tracks to resolve")
            return BatchMatchResult(total=0)

        concurrency = command.concurrency or self.default_concurrency
        reported = 0

        async def resolve_one(index: int, track: CanonicalTrack) -> ResolutionOutcome:
            try:
                return await self.resolver.resolve(track, command.catalog, command.storefront)
            except Exception as e:
                self.logger.exception(
                    "Resolution failed for track {}/{}: {}", index + 1, total, e
                )
                return ResolutionOutcome.failed(track, str(e))

        def on_result(index: int, track: CanonicalTrack, outcome: ResolutionOutcome) -> None:
            nonlocal reported
            reported += 1
            if reported % self.progress_log_frequency == 0 or reported == total:
                self.logger.info(f"Resolved {reported}/{total} tracks")
            emit_progress(
                command.on_progress,
                ProgressEvent(
                    current=reported,
                    total=total,
                    track_name=getattr(track, "name", "") or "",
                    artist=getattr(track, "primary_artist", "") or "",
                ),
                self.logger,
            )

        with logger.contextualize(
            operation="resolve_batch", track_count=total, concurrency=concurrency
        ):
            self.logger.info(
                f"Resolving {total} tracks with concurrency {concurrency}"
            )
            pool: OrderedWorkerPool[CanonicalTrack, ResolutionOutcome] = OrderedWorkerPool(
                concurrency=concurrency, logger_instance=self.logger
            )
            pool_result = await pool.run(
                tracks,
                resolve_one,
                stop_event=command.stop_event,
                on_result=on_result,
            )

            result = BatchMatchResult(
                outcomes=pool_result.completed_results,
                total=total,
                cancelled=pool_result.cancelled,
                pending=[tracks[i] for i in pool_result.pending_indices],
                execution_time_ms=int((time.perf_counter() - start_time) * 1000),
            )
            summary = result.summary()
            self.logger.info(
                f"Batch resolution complete: {summary['matched']} matched "
                f"({summary['needs_review']} need review), "
                f"{summary['unavailable']} unavailable, {summary['errors']} errors "
                f"out of {total} tracks"
            )
            return result


async def resolve_batch(
    source_tracks: Sequence[CanonicalTrack],
    catalog: TargetCatalog,
    on_progress: ProgressCallback | None = None,
    *,
    storefront: str | None = None,
    stop_event: asyncio.Event | None = None,
    concurrency: int | None = None,
    resolver: CandidateResolver | None = None,
) -> BatchMatchResult:
    """Resolve a batch of tracks (convenience function).

    Args:
        source_tracks: Canonical tracks in playlist order.
        catalog: Target catalog capability.
        on_progress: Optional fire-and-forget progress callback.
        storefront: Catalog region forwarded to every lookup.
        stop_event: Set it to stop dispatching further tracks.
        concurrency: Worker count; defaults to the configured batch concurrency.
        resolver: Resolver override, mainly for tests and tuning.

    Returns:
        BatchMatchResult with outcomes in input order.

    Raises:
        BatchConfigurationError: The batch cannot run at all.
    """
    command = ResolveBatchCommand(
        source_tracks=source_tracks,
        catalog=catalog,
        storefront=storefront,
        on_progress=on_progress,
        stop_event=stop_event,
        concurrency=concurrency,
    )
    use_case = ResolveBatchUseCase(resolver=resolver or CandidateResolver())
    return await use_case.execute(command)
