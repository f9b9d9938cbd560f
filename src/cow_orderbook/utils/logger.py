"""Structured logging configuration using structlog."""

import logging
import sys
from datetime import datetime, timezone
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor

# Stdlib logger that all client module loggers live under
PACKAGE_LOGGER_NAME = __name__.rsplit(".", 2)[0]

# Silent until the application configures logging
logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())

# Response bodies can be large (auction payloads); keep log lines readable
MAX_LOGGED_BODY_CHARS = 512


def add_short_timestamp(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add shortened timestamp (HH:MM:SS.ss) to log entries."""
    now = datetime.now(timezone.utc)
    event_dict["timestamp"] = now.strftime("%H:%M:%S") + f".{now.microsecond // 10000:02d}"
    return event_dict


def build_processors(json_logs: bool = False) -> list[Processor]:
    """Build the processor chain, ending in a console or JSON renderer."""
    renderer: Processor = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_short_timestamp,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: str = "INFO", json_logs: bool = False, stream: TextIO | None = None
) -> None:
    """Route client log events through stdlib logging.

    Meant to be called once by the application embedding the client. The
    client itself only emits events through loggers obtained with
    :func:`get_logger` or injected by the caller. Only the client's own
    stdlib logger gets a handler; the root logger is left alone.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to output logs in JSON format (default: False for human-readable)
        stream: Output stream (default: stdout)

    Raises:
        ValueError: If the log level is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(level)
    if all(isinstance(h, logging.NullHandler) for h in package_logger.handlers):
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    structlog.configure(
        processors=build_processors(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for a module.

    Events go to the stdlib logger of the same name, so nothing is printed
    until the application adds a handler (see :func:`configure_logging`).

    Args:
        name: Logger name (typically __name__ of the module)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def truncate_body(body: str | None, limit: int = MAX_LOGGED_BODY_CHARS) -> str | None:
    """Shorten a request or response body for logging.

    Args:
        body: Body text (None passes through)
        limit: Maximum number of characters kept

    Returns:
        The body, cut to ``limit`` characters with a marker when shortened
    """
    if body is None or len(body) <= limit:
        return body
    return f"{body[:limit]}... ({len(body) - limit} more chars)"
