"""Threshold tuning statistics over computed normalized scores.

Used offline to check how the tier ladder splits real data and to propose a
new ladder from score percentiles.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from content_trust.config.scoring import (
    MAX_TIER,
    SUGGESTED_THRESHOLD_PERCENTILES,
    TIER_THRESHOLDS,
)
from content_trust.scoring.engine import ScoringEngine


@dataclass
class HistogramBucket:
    """Equal-width bucket of scores."""

    label: str
    lower: float
    upper: float
    count: int = 0


def percentile(values: Sequence[float], p: float) -> float:
    """
    Percentile with linear interpolation between closest ranks.

    Args:
        values: Unsorted sample
        p: Percentile in [0, 100]

    Returns:
        Interpolated value

    Raises:
        ValueError: If values is empty or p is outside [0, 100]
    """
    if not values:
        raise ValueError("percentile() requires at least one value")
    if not 0.0 <= p <= 100.0:
        raise ValueError(f"Percentile must be within [0, 100], got {p}")

    ordered = sorted(values)
    index = (p / 100.0) * (len(ordered) - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    if lower == upper:
        return ordered[lower]
    fraction = index - lower
    return ordered[lower] * (1 - fraction) + ordered[upper] * fraction


def histogram(values: Sequence[float], buckets: int = 10) -> List[HistogramBucket]:
    """
    Split values into equal-width buckets between min and max.

    The last bucket is open-ended in its label ("60+") and closed in its
    range so the maximum lands in it. When every value is identical all of
    them land in the first bucket.
    """
    if buckets < 1:
        raise ValueError("buckets must be >= 1")
    if not values:
        return []

    low, high = min(values), max(values)
    width = (high - low) / buckets

    result = []
    for i in range(buckets):
        start = low + i * width
        end = low + (i + 1) * width
        label = f"{start:.0f}+" if i == buckets - 1 else f"{start:.0f}-{end:.0f}"
        result.append(HistogramBucket(label=label, lower=start, upper=end))

    for value in values:
        if width == 0:
            index = 0
        else:
            index = min(int((value - low) // width), buckets - 1)
        result[index].count += 1

    return result


def tier_distribution(
    scores: Sequence[float],
    engine: Optional[ScoringEngine] = None,
) -> Dict[int, int]:
    """
    Count how many normalized scores fall into each tier.

    Every tier appears in the result, including empty ones.
    """
    engine = engine or ScoringEngine()
    counts = {tier: 0 for tier in range(MAX_TIER + 1)}
    for score in scores:
        counts[engine.score_to_tier(score)] += 1
    return counts


def suggest_thresholds(
    scores: Sequence[float],
    percentiles: Sequence[float] = SUGGESTED_THRESHOLD_PERCENTILES,
) -> Dict[str, float]:
    """
    Propose tier thresholds from score percentiles.

    With the default percentiles about half of all scored sources stay
    Artisanal and only the top 3% reach Slop. Values are rounded to one
    decimal place. The result is not guaranteed to be strictly ascending
    for heavily tied data; ScoringEngine rejects such a ladder.
    """
    if len(percentiles) != len(TIER_THRESHOLDS):
        raise ValueError(
            f"Expected {len(TIER_THRESHOLDS)} percentiles, got {len(percentiles)}"
        )
    return {
        key: round(percentile(scores, p), 1)
        for key, p in zip(TIER_THRESHOLDS, percentiles)
    }


__all__ = [
    "HistogramBucket",
    "percentile",
    "histogram",
    "tier_distribution",
    "suggest_thresholds",
]
