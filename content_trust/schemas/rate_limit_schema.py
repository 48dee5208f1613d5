"""Rate limit configuration and result schemas."""

from pydantic import BaseModel, Field


class RateLimitConfig(BaseModel):
    """Fixed-window budget: at most `limit` requests per `window_ms`."""

    limit: int = Field(..., ge=1, description="Maximum requests allowed in the window")
    window_ms: int = Field(..., ge=1, alias="windowMs", description="Window duration in ms")

    model_config = {"populate_by_name": True, "frozen": True}


class RateLimitResult(BaseModel):
    """Outcome of a rate limit check.

    Rejection is a normal result (allowed=False), not an error. The HTTP layer
    translates it into a 429 with a Retry-After header.
    """

    allowed: bool
    remaining: int = Field(..., ge=0, description="Requests left in the current window")
    retry_after: int = Field(
        0,
        ge=0,
        alias="retryAfter",
        description="Seconds until the window resets (0 when allowed)",
    )

    model_config = {"populate_by_name": True, "frozen": True}
