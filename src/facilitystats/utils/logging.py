"""
Structured logging configuration using structlog.

Events go to stderr by default so that tables printed by the CLI on
stdout stay machine-readable.
"""

import logging
import sys
from typing import Any, TextIO

import structlog

_SHARED_PROCESSORS: tuple[structlog.types.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


def _renderers(json_output: bool, stream: TextIO) -> list[structlog.types.Processor]:
    if json_output:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=stream.isatty())]


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to INFO.
        json_output: Emit one JSON object per event instead of console lines.
        stream: Output stream (defaults to stderr).
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    stream = stream or sys.stderr

    logging.basicConfig(format="%(message)s", stream=stream, level=log_level)

    structlog.configure(
        processors=[*_SHARED_PROCESSORS, *_renderers(json_output, stream)],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Loggers are created at import time, before the CLI picks the stream
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return the structlog logger for a module (pass __name__)."""
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> structlog.contextvars.bound_contextvars:
    """
    Bind key-value pairs to every event logged inside the block.

    Example:
        with log_context(project="facilities-2024", source="facilities.csv"):
            log.info("Cleaned facilities", rows=412)
    """
    return structlog.contextvars.bound_contextvars(**kwargs)
