"""Hook execution manager.

This module provides the HookManager class which runs the hooks registered
for an event synchronously, on the caller's thread, isolating each hook's
failures from the others and from the caller.
"""

from datetime import datetime, timezone
from typing import Any

import structlog

from .base import Hook, HookContext
from .events import HookEvent
from .registry import HookRegistry


class HookManager:
    """Manages hook execution with error isolation."""

    def __init__(self, registry: HookRegistry | None = None):
        """Initialize the hook manager.

        Args:
            registry: The hook registry to get hooks from; a fresh one when omitted
        """
        self._registry = registry if registry is not None else HookRegistry()
        self._logger = structlog.get_logger(__name__)

    @property
    def registry(self) -> HookRegistry:
        return self._registry

    def register(self, hook: Hook) -> None:
        self._registry.register(hook)

    def unregister(self, hook: Hook) -> None:
        self._registry.unregister(hook)

    def emit(
        self, event: HookEvent, data: dict[str, Any] | None = None, **kwargs: Any
    ) -> None:
        """Emit an event to all registered hooks.

        Creates a HookContext with the provided data and hands it to every
        hook registered for the event. A failing hook is logged and skipped.

        Args:
            event: The event to emit
            data: Optional data dictionary to include in context
            **kwargs: Additional context fields (call, response)
        """
        hooks = self._registry.get_hooks(event)
        if not hooks:
            return

        context = HookContext(
            event=event,
            timestamp=datetime.now(timezone.utc),
            data=data or {},
            metadata={},
            **kwargs,
        )

        for hook in hooks:
            try:
                hook(context)
            except Exception as e:
                self._logger.error(
                    "hook_failed",
                    hook=hook.name,
                    hook_event=event.value,
                    error=str(e),
                    exc_info=e,
                )
