"""Scoring configuration for claim aggregation and tier classification.

Tiers are calculated algorithmically from aggregated claims, never voted
directly. Five tiers, from most to least human:

0. Artisanal     (normalized score < 5)
1. Mostly Human  (5 - 15)
2. Questionable  (15 - 35)
3. Compromised   (35 - 60)
4. Slop          (>= 60)
"""

from typing import Dict, List, Tuple

# Upper (exclusive) bound of each tier below the top one.
# A normalized score at or above the last threshold is Slop.
TIER_THRESHOLDS: Dict[str, float] = {
    "artisanal": 5.0,
    "mostly_human": 15.0,
    "questionable": 35.0,
    "compromised": 60.0,
}

# Tier display table: (tier, name, icon, color)
TIERS: List[Tuple[int, str, str, str]] = [
    (0, "Artisanal", "sparkle", "#006400"),
    (1, "Mostly Human", "user", "#008000"),
    (2, "Questionable", "question", "#FFD700"),
    (3, "Compromised", "warning", "#FF8C00"),
    (4, "Slop", "robot", "#FF0000"),
]

MIN_TIER: int = 0
MAX_TIER: int = 4

# Reference ceiling for a single claim's weight bar in the UI:
# impact=5 x confidence=5 x ~2x helpful multiplier (about 7 helpful votes).
MAX_CLAIM_WEIGHT: float = 5 * 5 * 2.0

# Floor for the helpful-vote multiplier
MIN_HELPFUL_FACTOR: float = 1.0

# Claim field ranges
MIN_RATING: int = 1
MAX_RATING: int = 5

# Impact scale (1-5): how much AI usage affects the content's integrity
# level -> (name, description, color)
IMPACT_LEVELS: Dict[int, Tuple[str, str, str]] = {
    1: ("Cosmetic", "Doesn't affect core content", "#22c55e"),
    2: ("Supplementary", "Affects supporting elements", "#84cc16"),
    3: ("Partial", "Some core content affected", "#eab308"),
    4: ("Substantial", "Major portions affected", "#f97316"),
    5: ("Pervasive", "Core content fundamentally compromised", "#ef4444"),
}

# Confidence scale (1-5): how certain the claimant is that content is AI-generated
CONFIDENCE_LEVELS: Dict[int, Tuple[str, str, str]] = {
    1: ("Speculative", "Pattern matching, gut feeling", "#9ca3af"),
    2: ("Suspicious", "Multiple circumstantial indicators", "#60a5fa"),
    3: ("Probable", "Strong stylistic/structural evidence", "#3b82f6"),
    4: ("Likely", "Multiple strong indicators align", "#2563eb"),
    5: ("Confirmed", "Watermark, metadata, admission, or definitive proof", "#1d4ed8"),
}

# Reputation tiers for claimants: (min_reputation, name, color), ascending
REPUTATION_TIERS: List[Tuple[int, str, str]] = [
    (0, "Member", "#a8a8a8"),
    (100, "Trusted", "#428542"),
    (500, "Expert", "#6e6eff"),
    (1000, "Master", "#a250a2"),
]

# Fallback color for missing or unknown levels
UNKNOWN_COLOR: str = "#808080"

# Percentiles used when proposing new tier thresholds
SUGGESTED_THRESHOLD_PERCENTILES: Tuple[float, float, float, float] = (50.0, 75.0, 90.0, 97.0)
