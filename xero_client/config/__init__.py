"""Configuration module for the Xero API client."""

from .core import HTTPSettings, LoggingSettings
from .settings import ConfigurationError, Settings, get_settings


__all__ = [
    "ConfigurationError",
    "HTTPSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
