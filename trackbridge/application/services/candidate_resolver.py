"""Two-tier candidate resolution against a target catalog.

Resolution short-circuits through two tiers:

1. ISRC lookup: authoritative whenever the source track carries an ISRC and the
   target catalog knows it.
2. Metadata search: free-text query on title and primary artist, every result
   scored with the composite score, accepted only above the threshold.

A failed or timed-out catalog call never fails the resolution; it is logged and
the resolver moves on to the next tier or to "unavailable".
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
import time

from attrs import define, field

from trackbridge.config import MatchingConfig, get_logger, settings
from trackbridge.domain.entities import CanonicalTrack, SourceFormat
from trackbridge.domain.matching import (
    CatalogLookupError,
    Confidence,
    ConfidenceThresholds,
    DiagnosticLogger,
    MatchCandidate,
    MatchMethod,
    MatchScoreWeights,
    ResolutionOutcome,
    ResolutionStatus,
    ScoreEvidence,
    TargetCatalog,
    TrackScorer,
    calculate_match_score,
    classify_confidence,
    normalize_for_comparison,
    normalize_search_term,
    to_canonical,
)


def _dedupe_by_id(
    candidates: Iterable[MatchCandidate], exclude_id: str | None, limit: int
) -> tuple[MatchCandidate, ...]:
    seen: set[str] = {exclude_id} if exclude_id else set()
    kept: list[MatchCandidate] = []
    for candidate in candidates:
        if len(kept) >= limit:
            break
        track_id = candidate.track.id
        if track_id is not None:
            if track_id in seen:
                continue
            seen.add(track_id)
        kept.append(candidate)
    return tuple(kept)


@define(slots=True)
class CandidateResolver:
    """Resolve one canonical source track to target-catalog candidates.

    Attributes:
        config: Thresholds, weights, timeouts and caps
        logger: Diagnostic sink for absorbed lookup failures
        scorer: Optional replacement for the composite score
    """

    config: MatchingConfig = field(factory=lambda: settings.matching)
    logger: DiagnosticLogger = field(factory=lambda: get_logger(__name__))
    scorer: TrackScorer | None = None

    @property
    def weights(self) -> MatchScoreWeights:
        return MatchScoreWeights(
            title=self.config.title_weight,
            artist=self.config.artist_weight,
            album=self.config.album_weight,
            duration=self.config.duration_weight,
            duration_close_ms=self.config.duration_close_ms,
            duration_near_ms=self.config.duration_near_ms,
        )

    @property
    def thresholds(self) -> ConfidenceThresholds:
        return ConfidenceThresholds(
            accept=self.config.accept_threshold,
            high=self.config.high_confidence_threshold,
        )

    async def resolve(
        self,
        source_track: CanonicalTrack,
        catalog: TargetCatalog,
        storefront: str | None = None,
    ) -> ResolutionOutcome:
        """Resolve a source track, ISRC tier first, metadata tier second.

        Args:
            source_track: Canonical track from the source catalog
            catalog: Target catalog capability
            storefront: Catalog region; defaults to the configured storefront

        Returns:
            A new ResolutionOutcome; never ``error`` status.

        Raises:
            TypeError: ``source_track`` is not a CanonicalTrack.
        """
        if not isinstance(source_track, CanonicalTrack):
            raise TypeError(
                f"Expected CanonicalTrack, got {type(source_track).__name__}"
            )

        storefront = storefront or self.config.default_storefront
        started = time.perf_counter()

        if source_track.isrc:
            outcome = await self._resolve_by_isrc(source_track, catalog, storefront, started)
            if outcome is not None:
                return outcome

        outcome = await self._resolve_by_metadata(source_track, catalog, storefront, started)
        if outcome is not None:
            return outcome

        self.logger.debug(
            "No match for {}",
            source_track.display_name(),
            isrc=source_track.isrc,
        )
        return ResolutionOutcome.unavailable(source_track)

    # -------------------------------------------------------------------------
    # Tiers
    # -------------------------------------------------------------------------

    async def _resolve_by_isrc(
        self,
        source_track: CanonicalTrack,
        catalog: TargetCatalog,
        storefront: str,
        started: float,
    ) -> ResolutionOutcome | None:
        isrc = source_track.isrc or ""
        results = await self._call_catalog(
            "lookup_by_isrc",
            lambda: catalog.lookup_by_isrc(isrc, storefront),
            self.config.isrc_timeout_seconds,
            track=source_track,
            catalog=catalog,
        )
        if not results:
            return None

        source_album = normalize_for_comparison(source_track.album_name)

        def album_matches(track: CanonicalTrack) -> bool:
            return bool(source_album) and normalize_for_comparison(track.album_name) == source_album

        best = next((t for t in results if album_matches(t)), results[0])

        def to_candidate(track: CanonicalTrack) -> MatchCandidate:
            score, evidence = self._score(source_track, track)
            return MatchCandidate(
                track=track,
                method=MatchMethod.ISRC,
                confidence=Confidence.HIGH,
                score=100 if album_matches(track) else score,
                match_time_ms=self._elapsed_ms(started),
                evidence=evidence,
            )

        primary = to_candidate(best)
        alternatives = _dedupe_by_id(
            (to_candidate(t) for t in results if t is not best),
            exclude_id=best.id,
            limit=self.config.isrc_max_alternatives,
        )

        self.logger.debug(
            "ISRC match: {} -> {}",
            source_track.display_name(),
            best.id,
            isrc=isrc,
            album_match=album_matches(best),
        )
        return ResolutionOutcome(
            source_track=source_track,
            status=ResolutionStatus.MATCHED,
            primary=primary,
            alternatives=alternatives,
        )

    async def _resolve_by_metadata(
        self,
        source_track: CanonicalTrack,
        catalog: TargetCatalog,
        storefront: str,
        started: float,
    ) -> ResolutionOutcome | None:
        term = normalize_search_term(
            f"{source_track.name} {source_track.primary_artist}"
        )
        if not term:
            return None

        results = await self._call_catalog(
            "search_by_text",
            lambda: catalog.search_by_text(term, storefront, self.config.search_limit),
            self.config.search_timeout_seconds,
            track=source_track,
            catalog=catalog,
        )
        if not results:
            return None

        thresholds = self.thresholds
        scored = []
        for track in results:
            score, evidence = self._score(source_track, track)
            scored.append(
                MatchCandidate(
                    track=track,
                    method=MatchMethod.METADATA,
                    confidence=classify_confidence(score, thresholds),
                    score=score,
                    match_time_ms=self._elapsed_ms(started),
                    evidence=evidence,
                )
            )
        # Stable sort keeps catalog order among equal scores
        scored.sort(key=lambda c: c.score, reverse=True)

        primary = scored[0]
        if primary.score < thresholds.accept:
            self.logger.debug(
                "Best metadata candidate below threshold for {}",
                source_track.display_name(),
                score=primary.score,
                threshold=thresholds.accept,
            )
            return None

        alternatives = _dedupe_by_id(
            scored[1:],
            exclude_id=primary.track.id,
            limit=self.config.metadata_max_alternatives,
        )
        status = (
            ResolutionStatus.MATCHED
            if primary.confidence is Confidence.HIGH
            else ResolutionStatus.NEEDS_REVIEW
        )
        return ResolutionOutcome(
            source_track=source_track,
            status=status,
            primary=primary,
            alternatives=alternatives,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _score(
        self, source: CanonicalTrack, candidate: CanonicalTrack
    ) -> tuple[int, ScoreEvidence | None]:
        if self.scorer is not None:
            return max(0, min(100, int(self.scorer(source, candidate)))), None
        return calculate_match_score(source, candidate, self.weights)

    async def _call_catalog(
        self,
        operation: str,
        call: Callable[[], Awaitable[list[CanonicalTrack]]],
        timeout: float,
        track: CanonicalTrack,
        catalog: TargetCatalog,
    ) -> list[CanonicalTrack]:
        """Run one bounded catalog call; any failure yields an empty list."""
        try:
            async with asyncio.timeout(timeout):
                results = await call()
            return self._validate_results(operation, results, catalog)
        except TimeoutError:
            self.logger.warning(
                "{} timed out after {}s for {}",
                operation,
                timeout,
                track.display_name(),
                operation=operation,
            )
        except Exception as e:
            self.logger.warning(
                "{} failed for {}: {}",
                operation,
                track.display_name(),
                e,
                operation=operation,
                error_type=type(e).__name__,
            )
        return []

    def _validate_results(
        self, operation: str, results: object, catalog: TargetCatalog
    ) -> list[CanonicalTrack]:
        """Keep canonical tracks, normalize raw records, drop anything else.

        Raw mappings are converted with the catalog's ``source_format``
        attribute when it declares one, canonical records otherwise.
        """
        if results is None:
            return []
        if not isinstance(results, list | tuple):
            raise CatalogLookupError(
                operation, f"expected a list, got {type(results).__name__}"
            )

        source_format = getattr(catalog, "source_format", SourceFormat.CANONICAL)
        if not isinstance(source_format, str):
            source_format = SourceFormat.CANONICAL

        tracks: list[CanonicalTrack] = []
        skipped = 0
        for item in results:
            if isinstance(item, CanonicalTrack):
                tracks.append(item)
                continue
            try:
                tracks.append(to_canonical(item, source_format))
            except (TypeError, ValueError):
                skipped += 1

        if skipped:
            self.logger.warning(
                "{} returned {} unusable records out of {}",
                operation,
                skipped,
                len(results),
                operation=operation,
                skipped=skipped,
            )
        return tracks

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.perf_counter() - started) * 1000)


async def resolve_candidate(
    source_track: CanonicalTrack,
    catalog: TargetCatalog,
    storefront: str | None = None,
) -> ResolutionOutcome:
    """Resolve a single track with the configured default resolver."""
    return await CandidateResolver().resolve(source_track, catalog, storefront)
