"""Bearer token signer implementation."""

import httpx

from xero_client.auth.models import ApiUser, Consumer
from xero_client.core.interfaces import Signer
from xero_client.exceptions import SigningError


class BearerTokenSigner(Signer):
    """Signer for static bearer tokens.

    The token does not depend on the request, so every call receives the same
    ``Bearer <token>`` Authorization value.
    """

    def __init__(self, token: str) -> None:
        """Initialize with a static bearer token.

        Args:
            token: Bearer token string

        Raises:
            SigningError: If the token is blank
        """
        self.token = token.strip()
        if not self.token:
            raise SigningError("Token cannot be empty")

    def get_signature(
        self,
        consumer: Consumer | None,
        user: ApiUser | None,
        uri: httpx.URL,
        method: str,
        signing_consumer: Consumer | None,
    ) -> str:
        return f"Bearer {self.token}"
