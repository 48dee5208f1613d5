"""Tests for ScoringEngine.

Tests cover:
- Empty claim lists default to tier 0
- Per-claim weight and the helpful-vote floor
- sqrt(n) normalization and volume suppression
- Tier ladder boundaries
- Order independence
- Out-of-range input never raising
- Custom threshold ladders
"""

import itertools
import math

import pytest
from pydantic import ValidationError

from content_trust.config.scoring import MAX_CLAIM_WEIGHT, TIER_THRESHOLDS
from content_trust.schemas import ClaimData, SourceScore
from content_trust.scoring import (
    ScoringEngine,
    claim_weight,
    compute_score,
    helpful_factor,
    max_claim_weight,
    score_to_tier,
)


def make_claim(impact: int, confidence: int, helpful_votes: int = 0) -> ClaimData:
    return ClaimData(impact=impact, confidence=confidence, helpful_votes=helpful_votes)


class TestEmptyInput:
    """Absence of evidence is the most favorable tier, not an error."""

    def test_empty_list(self):
        """No claims scores tier 0."""
        score = compute_score([])
        assert score == SourceScore(tier=0, raw_score=0.0, normalized_score=0.0, claim_count=0)

    def test_empty_generator(self):
        """An empty iterable scores tier 0."""
        score = compute_score(c for c in [])
        assert score.claim_count == 0
        assert score.tier == 0


class TestClaimWeight:
    """Tests for per-claim weight."""

    def test_zero_votes_is_base_product(self):
        """Without votes weight is impact times confidence."""
        assert claim_weight(make_claim(5, 5, 0)) == 25.0

    def test_one_vote_boost(self):
        """One vote multiplies by 1 + ln 2."""
        expected = (1 + math.log(2)) * 4 * 3
        assert claim_weight(make_claim(4, 3, 1)) == pytest.approx(expected)

    def test_helpful_votes_never_reduce_weight(self):
        """More votes never lower the weight."""
        for impact, confidence in itertools.product(range(1, 6), repeat=2):
            for votes in (0, 1, 2, 7, 100, 10_000):
                weight = claim_weight(make_claim(impact, confidence, votes))
                assert weight >= impact * confidence

    def test_votes_have_diminishing_returns(self):
        """Each vote adds less than the last."""
        gain_first = helpful_factor(1) - helpful_factor(0)
        gain_hundredth = helpful_factor(100) - helpful_factor(99)
        assert gain_first > gain_hundredth > 0

    def test_accepts_dict_with_camel_case_votes(self):
        """helpfulVotes is read from dicts."""
        assert claim_weight({"impact": 2, "confidence": 2, "helpfulVotes": 0}) == 4.0

    def test_accepts_dict_with_snake_case_votes(self):
        """helpful_votes is read from dicts."""
        assert claim_weight({"impact": 2, "confidence": 3, "helpful_votes": 0}) == 6.0

    def test_max_claim_weight_reference(self):
        """max_claim_weight is the display ceiling of 50."""
        assert max_claim_weight() == 50.0
        assert max_claim_weight() == MAX_CLAIM_WEIGHT


class TestComputeScore:
    """Tests for aggregation and normalization."""

    def test_single_strong_claim(self):
        """One 5x5 claim with no votes is Questionable."""
        score = compute_score([make_claim(5, 5, 0)])
        assert score.raw_score == 25.0
        assert score.normalized_score == 25.0
        assert score.claim_count == 1
        assert score.tier == 2
        assert score.tier_name == "Questionable"

    def test_volume_suppression(self):
        """Three minimal claims normalize to 3/sqrt(3) and stay Artisanal."""
        score = compute_score([make_claim(1, 1, 0)] * 3)
        assert score.raw_score == pytest.approx(3.0)
        assert score.normalized_score == pytest.approx(3 / math.sqrt(3))
        assert score.tier == 0

    def test_flood_of_weak_claims_cannot_outrank_strong_evidence(self):
        """Many weak claims stay below a few strong ones."""
        flood = compute_score([make_claim(1, 1, 0)] * 100)
        strong = compute_score([make_claim(5, 5, 0)])
        assert flood.normalized_score == pytest.approx(10.0)
        assert flood.tier < strong.tier

    def test_permutation_invariance(self):
        """Claim order never changes the score."""
        claims = [
            make_claim(5, 4, 3),
            make_claim(1, 2, 0),
            make_claim(3, 3, 12),
            make_claim(2, 5, 1),
        ]
        expected = compute_score(claims)
        for ordering in itertools.permutations(claims):
            assert compute_score(list(ordering)) == expected

    def test_adding_claim_never_decreases_raw_score(self):
        """Raw score only grows as claims are added."""
        claims = [make_claim(2, 2, 1)]
        previous = compute_score(claims).raw_score
        for extra in (make_claim(1, 1), make_claim(5, 5, 4), make_claim(3, 1, 0)):
            claims.append(extra)
            current = compute_score(claims).raw_score
            assert current >= previous
            previous = current

    def test_high_agreement_reaches_slop(self):
        """Many strong, upvoted claims reach Slop."""
        claims = [make_claim(5, 5, 20)] * 4
        score = compute_score(claims)
        assert score.tier == 4

    def test_dict_claims(self):
        """Plain dicts score like models."""
        score = compute_score([{"impact": 5, "confidence": 5, "helpfulVotes": 0}])
        assert score.tier == 2

    def test_structurally_invalid_claim_rejected(self):
        """Broken claim dicts raise ValidationError."""
        with pytest.raises(ValidationError):
            compute_score([{"impact": "lots"}])


class TestOutOfRangeInput:
    """Garbage in, garbage out - but never a crash."""

    def test_negative_helpful_votes(self):
        """Negative votes keep the factor at 1."""
        assert claim_weight(make_claim(2, 2, -1)) == 4.0
        assert claim_weight(make_claim(2, 2, -50)) == 4.0

    def test_negative_impact(self):
        """Negative impact scores without raising."""
        score = compute_score([make_claim(-3, 2, 0)])
        assert score.raw_score == -6.0
        assert score.tier == 0

    def test_ratings_above_range(self):
        """Ratings above 5 score without raising."""
        score = compute_score([make_claim(10, 10, 0)])
        assert score.tier == 4


class TestTierLadder:
    """Boundaries are inclusive below, exclusive above."""

    @pytest.mark.parametrize(
        "normalized,tier",
        [
            (-1.0, 0),
            (0.0, 0),
            (4.999, 0),
            (5.0, 1),
            (14.999, 1),
            (15.0, 2),
            (34.999, 2),
            (35.0, 3),
            (59.999, 3),
            (60.0, 4),
            (10_000.0, 4),
        ],
    )
    def test_boundaries(self, normalized, tier):
        """Each threshold belongs to the tier above."""
        assert score_to_tier(normalized) == tier

    def test_tier_is_non_decreasing(self):
        """Higher scores never map to lower tiers."""
        tiers = [score_to_tier(x / 10) for x in range(0, 800)]
        assert tiers == sorted(tiers)


class TestCustomThresholds:
    """Tests for ScoringEngine with a custom ladder."""

    def test_default_thresholds(self):
        """The default engine uses the standard ladder."""
        engine = ScoringEngine()
        assert engine.thresholds == TIER_THRESHOLDS

    def test_custom_ladder(self):
        """A custom ladder moves the boundaries."""
        engine = ScoringEngine({"a": 1.0, "b": 2.0, "c": 3.0, "d": 4.0})
        assert engine.score_to_tier(0.5) == 0
        assert engine.score_to_tier(2.5) == 2
        assert engine.score_to_tier(4.0) == 4

    def test_non_ascending_ladder_rejected(self):
        """A ladder that is not ascending is rejected."""
        with pytest.raises(ValueError):
            ScoringEngine({"a": 5.0, "b": 5.0, "c": 10.0, "d": 20.0})

    def test_wrong_length_ladder_rejected(self):
        """A ladder needs exactly four steps."""
        with pytest.raises(ValueError):
            ScoringEngine({"a": 5.0, "b": 10.0})
