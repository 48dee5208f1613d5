"""Batch jobs built on the scoring engine."""

from content_trust.pipeline.recalculation import RecalculationStats, ScoreRecalculator

__all__ = ["ScoreRecalculator", "RecalculationStats"]
