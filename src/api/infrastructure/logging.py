"""Structlog setup for the RBAC Admin API."""

import logging
import os
import sys

import structlog

_TRUTHY = ("1", "true", "yes")

# Libraries that log through the standard library instead of structlog
_LIBRARY_LOGGERS = ("sqlalchemy.engine", "alembic", "uvicorn.access")


def _wants_color() -> bool:
    # FORCE_COLOR covers non-TTY consoles such as `docker compose logs`
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return sys.stdout.isatty()


def configure_logging(debug: bool = False) -> None:
    """Configure structlog once at application start.

    Console rendering with colors for interactive use, one JSON object per
    line otherwise.

    Args:
        debug: Emit debug-level events such as individual permission checks
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if _wants_color():
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level if debug else logging.WARNING)
