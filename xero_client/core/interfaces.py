"""Capability interfaces injected into the dispatcher.

The dispatcher never signs or throttles by itself; it delegates to these two
collaborators so either can be swapped without touching request building.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import httpx


if TYPE_CHECKING:
    from xero_client.auth.models import ApiUser, Consumer


__all__ = ["Signer", "Throttle"]


class Signer(ABC):
    """Computes the Authorization header value for a request."""

    @abstractmethod
    def get_signature(
        self,
        consumer: "Consumer | None",
        user: "ApiUser | None",
        uri: httpx.URL,
        method: str,
        signing_consumer: "Consumer | None",
    ) -> str:
        """Compute the Authorization value for a request.

        Args:
            consumer: Application identity making the call
            user: User identity the call is made for
            uri: Fully built target URI, query included
            method: HTTP method
            signing_consumer: Application identity whose credentials sign the call

        Returns:
            The complete Authorization header value, scheme included. The
            dispatcher uses it verbatim.

        Raises:
            Any exception; the dispatcher lets it propagate.
        """
        pass


class Throttle(ABC):
    """Blocks the calling thread until a request may proceed."""

    @abstractmethod
    def wait_until_limit(self) -> None:
        """Block until the rate limit permits one more request."""
        pass
