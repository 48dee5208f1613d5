"""Tests for ScoreRecalculator batch processing."""

import pytest

from content_trust.config.settings import settings
from content_trust.pipeline import RecalculationStats, ScoreRecalculator
from content_trust.schemas import ClaimData
from content_trust.scoring import ScoringEngine, compute_score
from content_trust.scoring.levels import get_tier_name


CLAIMS = {
    "src-1": [ClaimData(impact=5, confidence=5)],
    "src-2": [{"impact": 1, "confidence": 1, "helpfulVotes": 0}] * 3,
    "src-3": [],
}


class FakeStore:
    """In-memory stand-in for the data layer."""

    def __init__(self, claims=None, failing=()):
        self.claims = claims if claims is not None else CLAIMS
        self.failing = set(failing)
        self.saved = {}

    async def load_claims(self, source_id):
        if source_id in self.failing:
            raise RuntimeError(f"database unavailable for {source_id}")
        return self.claims.get(source_id, [])

    async def save_score(self, source_id, score):
        self.saved[source_id] = score


class TestScoreRecalculator:
    """Tests for ScoreRecalculator."""

    @pytest.mark.asyncio
    async def test_rescoring_all_sources(self):
        """Every source in the batch is rescored and saved."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)

        stats = await recalculator.recalculate(["src-1", "src-2", "src-3"])

        assert stats.processed == 3
        assert stats.failed == 0
        assert stats.remaining == 0
        assert store.saved["src-1"].tier == 2
        assert store.saved["src-2"].tier == 0
        assert store.saved["src-1"] == compute_score(CLAIMS["src-1"])

    @pytest.mark.asyncio
    async def test_source_without_claims_saved_as_no_claims(self):
        """A source with no claims is saved as None, not as tier 0."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)

        stats = await recalculator.recalculate(["src-3"])

        assert stats.processed == 1
        assert "src-3" in store.saved
        assert store.saved["src-3"] is None
        assert get_tier_name(store.saved["src-3"]) == "No Claims"

    @pytest.mark.asyncio
    async def test_batch_size_limits_run(self):
        """Ids beyond batch_size are left for the next run."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score, batch_size=2)

        stats = await recalculator.recalculate(["src-1", "src-2", "src-3"])

        assert stats.processed == 2
        assert stats.remaining == 1
        assert set(store.saved) == {"src-1", "src-2"}

    @pytest.mark.asyncio
    async def test_failure_does_not_abort_batch(self):
        """A failing source is recorded and still counted as stale."""
        store = FakeStore(failing={"src-2"})
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)

        stats = await recalculator.recalculate(["src-1", "src-2", "src-3"])

        assert stats.processed == 2
        assert stats.failed == 1
        assert stats.remaining == 1
        assert "database unavailable" in stats.failures["src-2"]
        assert "src-2" not in store.saved

    @pytest.mark.asyncio
    async def test_remaining_counts_failures_and_deferred(self):
        """remaining adds failed sources to those beyond the batch."""
        store = FakeStore(failing={"src-1", "src-2"})
        recalculator = ScoreRecalculator(store.load_claims, store.save_score, batch_size=2)

        stats = await recalculator.recalculate(["src-1", "src-2", "src-3"])

        assert stats.processed == 0
        assert stats.failed == 2
        assert stats.remaining == 3
        assert store.saved == {}

    @pytest.mark.asyncio
    async def test_duplicates_ignored(self):
        """Repeated ids are processed once."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)

        stats = await recalculator.recalculate(["src-1", "src-1", "src-2"])

        assert stats.processed == 2
        assert stats.remaining == 0

    @pytest.mark.asyncio
    async def test_custom_engine(self):
        """An injected engine's thresholds decide the tier."""
        store = FakeStore()
        engine = ScoringEngine({"a": 100.0, "b": 200.0, "c": 300.0, "d": 400.0})
        recalculator = ScoreRecalculator(store.load_claims, store.save_score, engine=engine)

        await recalculator.recalculate(["src-1"])

        assert store.saved["src-1"].tier == 0

    @pytest.mark.asyncio
    async def test_empty_run(self):
        """No ids means an empty, successful run."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)

        stats = await recalculator.recalculate([])

        assert stats.to_dict()["processed"] == 0
        assert stats.remaining == 0
        assert stats.duration_ms >= 0

    def test_default_batch_size(self):
        """batch_size falls back to settings when omitted."""
        store = FakeStore()
        recalculator = ScoreRecalculator(store.load_claims, store.save_score)
        assert recalculator.batch_size == settings.recalculation_batch_size

    @pytest.mark.parametrize("batch_size", [0, -1])
    def test_invalid_batch_size(self, batch_size):
        """An explicit batch_size below 1 is rejected, zero included."""
        store = FakeStore()
        with pytest.raises(ValueError):
            ScoreRecalculator(store.load_claims, store.save_score, batch_size=batch_size)

    def test_stats_defaults(self):
        """Fresh stats serialize to zeros."""
        stats = RecalculationStats()
        assert stats.to_dict() == {
            "processed": 0,
            "failed": 0,
            "remaining": 0,
            "duration_ms": 0.0,
            "failures": {},
        }
