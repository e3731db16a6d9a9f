"""Core building blocks: transport factory, interfaces and logging."""

from .http_client import HTTPClientFactory
from .interfaces import Signer, Throttle


__all__ = ["HTTPClientFactory", "Signer", "Throttle"]
