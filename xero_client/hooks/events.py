"""Event definitions for the hook system."""

from enum import Enum

from pydantic import BaseModel, Field


class HookEvent(str, Enum):
    """Event types that can trigger hooks"""

    # Emitted once per call that reached a known HTTP outcome
    API_CALLED = "api.called"


class ApiCallEvent(BaseModel):
    """Record of one completed API call."""

    endpoint: str
    method: str
    elapsed_ms: int = Field(..., ge=0)
    response_code: str = Field(
        ...,
        description="Status name such as 'OK' or 'NotFound', or 'RateExceeded'",
    )
    body: str | None = Field(
        default=None, description="Response body, only set for failed calls"
    )
