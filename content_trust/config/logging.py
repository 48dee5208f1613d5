"""Loguru setup for the scoring, hierarchy and rate limiting components.

Console output in an interactive terminal when LOG_FORMAT=console, JSON
records on stdout otherwise. Every record carries a `component` and the
service name so limiter rejections and sweep passes can be filtered in
aggregated logs.
"""

import sys
from typing import Optional

from loguru import logger

from content_trust.config.settings import settings

SERVICE_NAME = "content_trust"

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Install the single loguru sink used by the subsystem.

    Args:
        level: Minimum level (defaults to settings.log_level)
        log_format: "console" or "json" (defaults to settings.log_format)
    """
    level = (level or settings.log_level).upper()
    log_format = (log_format or settings.log_format).lower()

    logger.remove()

    if log_format == "console" and sys.stderr.isatty():
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)
    else:
        logger.add(
            sys.stdout,
            format="{message}",
            level=level,
            serialize=True,
            diagnose=False,
        )

    # Records logged without an explicit bind still render {extra[component]}
    logger.configure(extra={"component": SERVICE_NAME, "service": SERVICE_NAME})


def get_logger(component: str):
    """
    Logger bound to a component name, e.g. get_logger("cli").

    Rate limiter and scoring classes bind their class name the same way.
    """
    return logger.bind(component=component)


configure_logging()

__all__ = ["logger", "get_logger", "configure_logging", "SERVICE_NAME"]
