"""Claim and score schemas for the scoring engine.

Claims are read-only input supplied by the data layer. Range checks
(impact/confidence 1-5, helpful_votes >= 0) belong to the submission path
(see content_trust.scoring.validation); these models only enforce types so
the engine still receives, and survives, out-of-range values.

SourceScore is ephemeral: recomputed from a claim snapshot whenever a tier is
displayed, never the source of truth.
"""

from typing import Optional

from pydantic import BaseModel, Field

from content_trust.config.scoring import MAX_TIER, MIN_TIER, TIERS


class ClaimData(BaseModel):
    """A single user-submitted claim as seen by the scoring engine."""

    impact: int = Field(..., description="Severity of AI influence on the content (1-5)")
    confidence: int = Field(..., description="Certainty that content is AI-generated (1-5)")
    helpful_votes: int = Field(
        0,
        alias="helpfulVotes",
        description="Community endorsement count (>= 0)",
    )

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "json_schema_extra": {
            "examples": [{"impact": 4, "confidence": 3, "helpful_votes": 2}]
        },
    }


class SourceScore(BaseModel):
    """Aggregated score and tier for one source.

    Attributes:
        tier: Discrete classification 0 (Artisanal) to 4 (Slop)
        raw_score: Sum of per-claim weights
        normalized_score: raw_score / sqrt(claim_count)
        claim_count: Number of claims aggregated
    """

    tier: int = Field(0, ge=MIN_TIER, le=MAX_TIER, description="Tier 0-4")
    raw_score: float = Field(0.0, alias="rawScore", description="Sum of claim weights")
    normalized_score: float = Field(
        0.0, alias="normalizedScore", description="Volume-corrected score"
    )
    claim_count: int = Field(0, ge=0, alias="claimCount", description="Claims aggregated")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def tier_name(self) -> Optional[str]:
        """Display name of the tier (None if the tier is unknown)."""
        for tier, name, _icon, _color in TIERS:
            if tier == self.tier:
                return name
        return None
