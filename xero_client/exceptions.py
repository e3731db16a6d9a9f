"""Custom exceptions for the Xero API client."""


class XeroClientError(Exception):
    """Base exception for all client-side errors."""

    pass


class ConfigurationError(XeroClientError):
    """Raised when configuration loading or validation fails."""

    pass


class SigningError(XeroClientError):
    """Raised when a signer cannot produce an Authorization value."""

    pass
