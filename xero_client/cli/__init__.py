"""Command line interface for the Xero API client."""

from .commands import app, main


__all__ = ["app", "main"]
