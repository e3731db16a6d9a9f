"""HTTP client adapter for the Xero accounting API."""

from ._version import __version__
from .auth import ApiUser, BearerTokenSigner, Consumer
from .core.interfaces import Signer, Throttle
from .exceptions import ConfigurationError, SigningError, XeroClientError
from .hooks import ApiCallEvent, HookEvent
from .http import HttpDispatcher, Response


__all__ = [
    "__version__",
    "ApiCallEvent",
    "ApiUser",
    "BearerTokenSigner",
    "ConfigurationError",
    "Consumer",
    "HookEvent",
    "HttpDispatcher",
    "Response",
    "Signer",
    "SigningError",
    "Throttle",
    "XeroClientError",
]
