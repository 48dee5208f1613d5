"""Batch recalculation of stale source scores.

Writes (new claims, helpful votes) only mark a source's cached score as
stale; a periodic job then rescores stale sources in bounded batches. The
data layer supplies two async callables, so this module stays free of any
storage engine:

    load_claims(source_id) -> claims for the source
    save_score(source_id, score) -> persist the new cached score, where
        score is None for a source with no claims ("No Claims")

Usage:
    from content_trust.pipeline import ScoreRecalculator

    recalculator = ScoreRecalculator(load_claims, save_score)
    stats = await recalculator.recalculate(stale_source_ids)
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence

from content_trust.config.settings import settings
from content_trust.schemas import SourceScore
from content_trust.scoring.engine import ClaimLike, ScoringEngine
from content_trust.utils.logging import get_correlation_id, get_structured_logger

ClaimLoader = Callable[[str], Awaitable[Sequence[ClaimLike]]]
ScoreWriter = Callable[[str, Optional[SourceScore]], Awaitable[None]]


@dataclass
class RecalculationStats:
    """Outcome of one recalculation run.

    Attributes:
        processed: Sources rescored and saved
        failed: Sources whose load, scoring or save raised
        remaining: Stale sources left for the next run, failures included
        duration_ms: Wall time of the run
        failures: source_id -> error message
    """

    processed: int = 0
    failed: int = 0
    remaining: int = 0
    duration_ms: float = 0.0
    failures: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ScoreRecalculator:
    """Rescores stale sources in batches, one source at a time.

    A failure on one source is logged and recorded; the rest of the batch
    still runs and the failed source stays stale for the next run.
    """

    def __init__(
        self,
        load_claims: ClaimLoader,
        save_score: ScoreWriter,
        engine: Optional[ScoringEngine] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        """Initialize ScoreRecalculator.

        Args:
            load_claims: Async loader of a source's active claims.
            save_score: Async writer for the recomputed score. Receives None
                when the source has no claims.
            engine: Scoring engine. Default thresholds if None.
            batch_size: Max sources per run. Defaults to settings.
        """
        self._load_claims = load_claims
        self._save_score = save_score
        self._engine = engine or ScoringEngine()
        self.batch_size = (
            batch_size
            if batch_size is not None
            else settings.recalculation_batch_size
        )
        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")

    async def _rescore(self, source_id: str) -> Optional[SourceScore]:
        claims = list(await self._load_claims(source_id))
        # An empty source is cached as null, not as tier 0
        score = self._engine.compute_score(claims) if claims else None
        await self._save_score(source_id, score)
        return score

    async def recalculate(self, source_ids: Sequence[str]) -> RecalculationStats:
        """Rescore up to batch_size stale sources.

        Args:
            source_ids: Stale source ids, oldest first. Duplicates are ignored.

        Returns:
            RecalculationStats for the run.
        """
        run_id = get_correlation_id()
        log = get_structured_logger(__name__, run_id=run_id).bind(
            component="ScoreRecalculator"
        )
        started = time.perf_counter()

        pending = list(dict.fromkeys(source_ids))
        batch = pending[: self.batch_size]
        deferred = len(pending) - len(batch)
        stats = RecalculationStats()

        log.info("recalculation_started", batch=len(batch), deferred=deferred)

        for source_id in batch:
            try:
                score = await self._rescore(source_id)
            except Exception as e:
                stats.failed += 1
                stats.failures[source_id] = str(e)
                log.error("source_recalculation_failed", source_id=source_id, error=str(e))
                continue

            stats.processed += 1
            if score is None:
                log.debug("source_recalculated", source_id=source_id, tier=None, claim_count=0)
            else:
                log.debug(
                    "source_recalculated",
                    source_id=source_id,
                    tier=score.tier,
                    normalized_score=round(score.normalized_score, 2),
                    claim_count=score.claim_count,
                )

        stats.remaining = deferred + stats.failed
        stats.duration_ms = (time.perf_counter() - started) * 1000.0
        log.info(
            "recalculation_complete",
            processed=stats.processed,
            failed=stats.failed,
            remaining=stats.remaining,
            duration_ms=round(stats.duration_ms, 1),
        )
        return stats


__all__ = ["ScoreRecalculator", "RecalculationStats", "ClaimLoader", "ScoreWriter"]
