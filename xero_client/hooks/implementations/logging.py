"""Structured logging hook implementation."""

from typing import Any

import structlog

from ..base import HookContext
from ..events import HookEvent


class LoggingHook:
    """Structured logging for completed API calls"""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        """Initialize logging hook.

        Args:
            logger: Optional structlog logger instance. If None, creates a new one.
        """
        self.logger = logger or structlog.get_logger(__name__)
        self._name = "logging_hook"
        self._events = list(HookEvent)

    @property
    def name(self) -> str:
        """Hook name for debugging"""
        return self._name

    @property
    def events(self) -> list[HookEvent]:
        """Events this hook listens to"""
        return self._events

    def __call__(self, context: HookContext) -> None:
        """Log event with structured context."""
        log_data: dict[str, Any] = {
            "hook_event": context.event.value,
            "timestamp": context.timestamp.isoformat(),
        }

        if context.call:
            log_data.update(
                endpoint=context.call.endpoint,
                method=context.call.method,
                elapsed_ms=context.call.elapsed_ms,
                response_code=context.call.response_code,
            )
        elif context.data:
            log_data["data"] = context.data

        # Failed calls carry a body
        if context.call and context.call.body is not None:
            self.logger.warning("api_call_failed", **log_data)
        else:
            self.logger.info("api_call_completed", **log_data)
