"""Built-in hook implementations."""

from .callback import ApiCallCallback, CallbackHook
from .logging import LoggingHook


__all__ = ["ApiCallCallback", "CallbackHook", "LoggingHook"]
