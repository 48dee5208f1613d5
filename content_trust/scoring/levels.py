"""Display metadata for tiers, claim ratings and claimant reputation.

Lookups are total: unknown levels fall back to "Unknown" and a neutral gray
rather than raising, because they feed badges and selectors directly.
"""

from dataclasses import dataclass
from typing import Optional

from content_trust.config.scoring import (
    CONFIDENCE_LEVELS,
    IMPACT_LEVELS,
    REPUTATION_TIERS,
    TIERS,
    UNKNOWN_COLOR,
)

NO_CLAIMS_LABEL = "No Claims"
UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class TierInfo:
    """Display data for one tier."""

    tier: int
    name: str
    icon: str
    color: str


@dataclass(frozen=True)
class LevelInfo:
    """Display data for an impact or confidence rating."""

    level: int
    name: str
    description: str
    color: str


@dataclass(frozen=True)
class ReputationTier:
    """Claimant reputation band."""

    min_reputation: int
    name: str
    color: str


TIER_INFOS: list[TierInfo] = [TierInfo(*row) for row in TIERS]
IMPACT_INFOS: list[LevelInfo] = [
    LevelInfo(level, *row) for level, row in sorted(IMPACT_LEVELS.items())
]
CONFIDENCE_INFOS: list[LevelInfo] = [
    LevelInfo(level, *row) for level, row in sorted(CONFIDENCE_LEVELS.items())
]
REPUTATION_INFOS: list[ReputationTier] = [ReputationTier(*row) for row in REPUTATION_TIERS]


# Tiers
#
# A source with no score yet is passed as None ("No Claims"), which is
# distinct from tier 0.

def get_tier_info(tier: Optional[int]) -> Optional[TierInfo]:
    if tier is None:
        return None
    return next((info for info in TIER_INFOS if info.tier == tier), None)


def get_tier_name(tier: Optional[int]) -> str:
    if tier is None:
        return NO_CLAIMS_LABEL
    info = get_tier_info(tier)
    return info.name if info else UNKNOWN_LABEL


def get_tier_color(tier: Optional[int]) -> str:
    info = get_tier_info(tier)
    return info.color if info else UNKNOWN_COLOR


# Impact

def get_impact_info(level: int) -> Optional[LevelInfo]:
    return next((info for info in IMPACT_INFOS if info.level == level), None)


def get_impact_name(level: int) -> str:
    info = get_impact_info(level)
    return info.name if info else UNKNOWN_LABEL


def get_impact_color(level: int) -> str:
    """Green (cosmetic) to red (pervasive)."""
    info = get_impact_info(level)
    return info.color if info else UNKNOWN_COLOR


# Confidence

def get_confidence_info(level: int) -> Optional[LevelInfo]:
    return next((info for info in CONFIDENCE_INFOS if info.level == level), None)


def get_confidence_name(level: int) -> str:
    info = get_confidence_info(level)
    return info.name if info else UNKNOWN_LABEL


def get_confidence_color(level: int) -> str:
    """Gray (speculative) to deep blue (confirmed)."""
    info = get_confidence_info(level)
    return info.color if info else UNKNOWN_COLOR


# Reputation

def get_reputation_tier(reputation: int) -> ReputationTier:
    """
    Highest reputation band reached.

    Negative reputation still maps to the lowest band.
    """
    for band in reversed(REPUTATION_INFOS):
        if reputation >= band.min_reputation:
            return band
    return REPUTATION_INFOS[0]


__all__ = [
    "TierInfo",
    "LevelInfo",
    "ReputationTier",
    "TIER_INFOS",
    "IMPACT_INFOS",
    "CONFIDENCE_INFOS",
    "REPUTATION_INFOS",
    "get_tier_info",
    "get_tier_name",
    "get_tier_color",
    "get_impact_info",
    "get_impact_name",
    "get_impact_color",
    "get_confidence_info",
    "get_confidence_name",
    "get_confidence_color",
    "get_reputation_tier",
]
