"""Hook protocol and the context passed to hooks."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from .events import ApiCallEvent, HookEvent


if TYPE_CHECKING:
    from xero_client.http.response import Response


@dataclass
class HookContext:
    """Context passed to every hook invocation."""

    event: HookEvent
    timestamp: datetime
    data: dict[str, Any]
    metadata: dict[str, Any] = field(default_factory=dict)
    call: ApiCallEvent | None = None
    response: "Response | None" = None


@runtime_checkable
class Hook(Protocol):
    """A callable reacting to one or more events."""

    @property
    def name(self) -> str: ...

    @property
    def events(self) -> list[HookEvent]: ...

    def __call__(self, context: HookContext) -> None: ...
