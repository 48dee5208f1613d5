"""Application settings using Pydantic BaseSettings for environment variable management."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log output format (json for production, console for dev)
        rate_limit_cleanup_interval_ms: Period of the limiter's background sweep
        rate_limit_expiry_buffer_ms: Time past a window's end before it is evicted
        recalculation_batch_size: Max sources rescored per recalculation run
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="json",
        description="Log output format: json or console"
    )
    rate_limit_cleanup_interval_ms: int = Field(
        default=5 * 60 * 1000,
        gt=0,
        description="How often stale rate-limit entries are swept"
    )
    rate_limit_expiry_buffer_ms: int = Field(
        default=5 * 60 * 1000,
        ge=0,
        description="Entries whose window ended longer ago than this are evicted"
    )
    recalculation_batch_size: int = Field(
        default=100,
        gt=0,
        description="Maximum number of stale sources rescored per run"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance - import this throughout the application
settings = Settings()
