"""Rate limit presets for mutation endpoints.

Each mutation kind gets its own fixed-window budget per user. Keys are built
as "<action>:<subject>" (see rate_limit_key).
"""

from enum import Enum
from typing import Dict

from content_trust.schemas.rate_limit_schema import RateLimitConfig

HOUR_MS: int = 60 * 60 * 1000


class RateLimitAction(str, Enum):
    """Mutation kinds that are rate limited."""

    CLAIM_SUBMIT = "claim_submit"
    VOTE = "vote"
    SOURCE_CREATE = "source_create"
    COMMENT_SUBMIT = "comment_submit"
    FLAG = "flag"


RATE_LIMITS: Dict[RateLimitAction, RateLimitConfig] = {
    RateLimitAction.CLAIM_SUBMIT: RateLimitConfig(limit=5, window_ms=HOUR_MS),
    RateLimitAction.VOTE: RateLimitConfig(limit=50, window_ms=HOUR_MS),
    RateLimitAction.SOURCE_CREATE: RateLimitConfig(limit=3, window_ms=HOUR_MS),
    RateLimitAction.COMMENT_SUBMIT: RateLimitConfig(limit=10, window_ms=HOUR_MS),
    RateLimitAction.FLAG: RateLimitConfig(limit=20, window_ms=HOUR_MS),
}


def rate_limit_key(action: RateLimitAction, subject: str) -> str:
    """Build the limiter key for an action performed by a subject (e.g. a user id)."""
    return f"{RateLimitAction(action).value}:{subject}"
