"""Structured logging configuration for the Xero API client."""

import logging
import sys
from typing import Any

import structlog

from xero_client.config.core import LoggingSettings


def _use_json(log_format: str) -> bool:
    if log_format == "json":
        return True
    if log_format == "console":
        return False
    # auto: pretty output on a terminal, JSON when piped
    return not sys.stderr.isatty()


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honoured
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(
    json_logs: bool = False,
    log_level_name: str = "INFO",
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        json_logs: Render JSON lines instead of the console renderer
        log_level_name: Logging level name (DEBUG, INFO, ...)
    """
    level = getattr(logging, log_level_name.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    renderer: Any
    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            exception_formatter=structlog.dev.rich_traceback
        )

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=_stderr_logger_factory,
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(level=level, stream=sys.stderr, force=True)

    # Quiet the transport's own chatter
    for logger_name in ["httpx", "httpcore"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def setup_logging_from_settings(settings: LoggingSettings) -> None:
    """Configure logging from a ``LoggingSettings`` section."""
    setup_logging(
        json_logs=_use_json(settings.format),
        log_level_name=settings.level,
    )
