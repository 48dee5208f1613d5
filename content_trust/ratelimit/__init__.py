"""Fixed-window rate limiting for mutation endpoints.

Every mutation (claim submission, vote, source creation, comment, flag) calls
FixedWindowRateLimiter.check with a preset from RATE_LIMITS before persisting.
"""

from content_trust.config.rate_limits import (
    RATE_LIMITS,
    RateLimitAction,
    rate_limit_key,
)
from content_trust.ratelimit.limiter import (
    FixedWindowRateLimiter,
    RateLimitEntry,
)

__all__ = [
    "FixedWindowRateLimiter",
    "RateLimitEntry",
    "RATE_LIMITS",
    "RateLimitAction",
    "rate_limit_key",
]
