"""Claim aggregation and tier classification.

This package turns the claims filed against a source into a SourceScore:
- ScoringEngine / compute_score: weighted, sqrt-normalized score and tier
- claim_weight / max_claim_weight: per-claim weight for UI display
- levels: tier, impact, confidence and reputation display metadata
- validation: submission-time checks on claim fields
- analysis: percentile and distribution helpers for threshold tuning

The formula: weight = max(1, 1 + ln(votes + 1)) x impact x confidence,
normalized = Sum(weight) / sqrt(n).
"""

from content_trust.scoring.engine import (
    ScoringEngine,
    claim_weight,
    compute_score,
    helpful_factor,
    max_claim_weight,
    score_to_tier,
)

__all__ = [
    "ScoringEngine",
    "compute_score",
    "claim_weight",
    "max_claim_weight",
    "score_to_tier",
    "helpful_factor",
]
