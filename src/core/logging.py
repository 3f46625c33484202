"""Structured logging configuration using structlog."""

import logging
import sys

import structlog

from src.core.config import settings


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    JSON output is used in deployed environments; ``console`` gives
    human-readable output for local development.
    """
    level_name = (log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    renderer = (
        structlog.dev.ConsoleRenderer()
        if (log_format or settings.log_format) == "console"
        else structlog.processors.JSONRenderer()
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # httpx logs every request at INFO; upstream calls are logged by the client
    logging.getLogger("httpx").setLevel(logging.WARNING)
