"""Hook system for the Xero API client.

This package provides the event-driven notification fired after each API call
that reached a known HTTP outcome.

Key components:
- HookEvent: Enumeration of all supported events
- ApiCallEvent: Record describing one completed call
- HookContext: Context data passed to hooks
- Hook: Protocol for hook implementations
- HookRegistry: Registry for managing hooks
- HookManager: Manager for executing hooks
"""

from .base import Hook, HookContext
from .events import ApiCallEvent, HookEvent
from .manager import HookManager
from .registry import HookRegistry


__all__ = [
    "ApiCallEvent",
    "Hook",
    "HookContext",
    "HookEvent",
    "HookManager",
    "HookRegistry",
]
