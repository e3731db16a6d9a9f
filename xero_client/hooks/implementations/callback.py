"""Hook adapting a plain callable to the API_CALLED event."""

from collections.abc import Callable

from ..base import HookContext
from ..events import ApiCallEvent, HookEvent


ApiCallCallback = Callable[[ApiCallEvent], None]


class CallbackHook:
    """Invoke ``callback(ApiCallEvent)`` after every completed call."""

    def __init__(self, callback: ApiCallCallback, name: str | None = None):
        self.callback = callback
        self._name = name or getattr(callback, "__name__", "callback_hook")

    @property
    def name(self) -> str:
        return self._name

    @property
    def events(self) -> list[HookEvent]:
        return [HookEvent.API_CALLED]

    def __call__(self, context: HookContext) -> None:
        if context.call is not None:
            self.callback(context.call)
