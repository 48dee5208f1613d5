"""Claim aggregation and tier classification.

Core formula:
    weight     = max(1, 1 + ln(helpful_votes + 1)) x impact x confidence
    raw        = Sum(weight)
    normalized = raw / sqrt(claim_count)
    tier       = first threshold the normalized score falls below

The logarithm gives diminishing returns per helpful vote, so brigading a
single claim with votes barely moves it. Dividing by sqrt(n) rather than n
lets legitimate evidence accumulate while flooding a source with many
low-weight claims cannot push it into a worse tier: average weight matters
more than raw count once several claims exist.

The computation only sums and counts, so the result is independent of claim
order.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger

from content_trust.config.scoring import (
    MAX_CLAIM_WEIGHT,
    MAX_TIER,
    MIN_HELPFUL_FACTOR,
    TIER_THRESHOLDS,
)
from content_trust.schemas import ClaimData, SourceScore

ClaimLike = Union[ClaimData, Mapping[str, Any]]


def _as_claim(claim: ClaimLike) -> ClaimData:
    if isinstance(claim, ClaimData):
        return claim
    return ClaimData.model_validate(claim)


def helpful_factor(helpful_votes: int) -> float:
    """
    Multiplier earned by a claim's helpful votes.

    0 votes -> 1.0, 1 vote -> ~1.69, 7 votes -> ~3.08. Never below 1.0, so
    votes can only boost a claim. Inputs that would make the logarithm
    undefined (helpful_votes <= -1) fall back to the floor.
    """
    argument = helpful_votes + 1
    if argument <= 0:
        return MIN_HELPFUL_FACTOR
    return max(MIN_HELPFUL_FACTOR, 1 + math.log(argument))


class ScoringEngine:
    """
    Computes source scores from claims.

    Usage:
        engine = ScoringEngine()
        score = engine.compute_score(claims)

    Custom thresholds are used by threshold tuning to preview a new ladder
    against existing scores.

    Attributes:
        thresholds: Ascending upper bounds for tiers 0..3; scores at or above
                    the last bound map to the top tier
    """

    def __init__(self, thresholds: Optional[Dict[str, float]] = None):
        """
        Initialize engine with a tier threshold ladder.

        Args:
            thresholds: Ordered mapping of tier key -> exclusive upper bound
                        (uses TIER_THRESHOLDS if None)

        Raises:
            ValueError: If the ladder is not strictly ascending or has the
                        wrong number of steps
        """
        self.thresholds = dict(thresholds or TIER_THRESHOLDS)
        bounds = list(self.thresholds.values())
        if len(bounds) != MAX_TIER:
            raise ValueError(
                f"Expected {MAX_TIER} tier thresholds, got {len(bounds)}"
            )
        if any(lower >= upper for lower, upper in zip(bounds, bounds[1:])):
            raise ValueError(f"Tier thresholds must be strictly ascending: {bounds}")
        self._bounds: List[float] = bounds
        self.logger = logger.bind(component="ScoringEngine")

    def claim_weight(self, claim: ClaimLike) -> float:
        """
        Weight of a single claim.

        Also used by the UI to display a claim's importance.

        Args:
            claim: ClaimData or dict with impact, confidence, helpful_votes

        Returns:
            helpful_factor x impact x confidence
        """
        claim = _as_claim(claim)
        return helpful_factor(claim.helpful_votes) * claim.impact * claim.confidence

    def score_to_tier(self, normalized_score: float) -> int:
        """
        Map a normalized score to a tier (0-4).

        Lower bounds are inclusive, upper bounds exclusive; the top tier is
        unbounded.
        """
        for tier, upper in enumerate(self._bounds):
            if normalized_score < upper:
                return tier
        return MAX_TIER

    def compute_score(self, claims: Iterable[ClaimLike]) -> SourceScore:
        """
        Aggregate claims for one source into a SourceScore.

        No claims means no evidence: tier 0 with zero scores, not an error.

        Args:
            claims: Claims for a single source, in any order

        Returns:
            SourceScore with tier, raw_score, normalized_score, claim_count
        """
        weights = [self.claim_weight(claim) for claim in claims]
        if not weights:
            return SourceScore(tier=0, raw_score=0.0, normalized_score=0.0, claim_count=0)

        raw_score = math.fsum(weights)
        normalized_score = raw_score / math.sqrt(len(weights))
        tier = self.score_to_tier(normalized_score)

        self.logger.debug(
            f"Score computed: tier={tier} normalized={normalized_score:.2f}",
            claim_count=len(weights),
            raw_score=raw_score,
        )

        return SourceScore(
            tier=tier,
            raw_score=raw_score,
            normalized_score=normalized_score,
            claim_count=len(weights),
        )


_default_engine = ScoringEngine()


def compute_score(claims: Iterable[ClaimLike]) -> SourceScore:
    """Aggregate claims with the default tier thresholds."""
    return _default_engine.compute_score(claims)


def claim_weight(claim: ClaimLike) -> float:
    """Weight of a single claim."""
    return _default_engine.claim_weight(claim)


def score_to_tier(normalized_score: float) -> int:
    """Map a normalized score to a tier with the default thresholds."""
    return _default_engine.score_to_tier(normalized_score)


def max_claim_weight() -> float:
    """Reference ceiling for a claim weight bar. Display only, not used for tiers."""
    return MAX_CLAIM_WEIGHT


__all__ = [
    "ScoringEngine",
    "compute_score",
    "claim_weight",
    "score_to_tier",
    "max_claim_weight",
    "helpful_factor",
]
