"""Structured logging configuration with structlog.

Two output modes:
- console: coloured key=value lines for interactive use (default).
- json: one JSON object per line for log aggregation.

Usage:
    from ballot.observability.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", fmt="json")
    log = get_logger(__name__)
    log.info("voter_registered", address="alice")
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import FilteringBoundLogger, Processor

LOG_FORMATS = ("console", "json")


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog once at process startup.

    Raises ValueError for an unknown level name or format.
    """
    level_value = logging.getLevelName(level.upper())
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level}")
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format: {fmt} (expected one of {LOG_FORMATS})")

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared_processors + [final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "ballot") -> FilteringBoundLogger:
    """Get a structured logger instance.

    Usage:
        log = get_logger(__name__).bind(campaign_admin="admin")
        log.info("vote_cast", voter="alice", proposal_id=1)
    """
    return structlog.get_logger(name)
