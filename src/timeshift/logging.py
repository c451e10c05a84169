"""Logging configuration for the timeshift library."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator

import structlog


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure timeshift logging.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR"). Pattern
            builds and cache traffic log at DEBUG.
        json_output: True for JSON output (production), False for console

    Log lines go to stderr so they never mix with shifted values a
    script prints.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"unknown log level {level!r}")

    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


@contextmanager
def timed_block(
    logger: structlog.BoundLogger,
    event: str,
    level: str = "debug",
    **fields: Any,
) -> Generator[dict[str, Any], None, None]:
    """Log ``event`` with the block's elapsed time once the block exits.

    The yielded dict holds the fields logged with the event; the block may
    add to it. If the block raises, the exception's class name is logged as
    ``error`` and the exception propagates.
    """
    extra = dict(fields)
    start = time.perf_counter()
    try:
        yield extra
    except Exception as exc:
        extra["error"] = type(exc).__name__
        raise
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        getattr(logger, level)(event, elapsed_ms=round(elapsed_ms, 2), **extra)
