"""Identities and signers for authenticating API calls."""

from .bearer import BearerTokenSigner
from .models import ApiUser, Consumer


__all__ = ["ApiUser", "BearerTokenSigner", "Consumer"]
