"""Core configuration settings - HTTP and logging."""

from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_ACCEPT_ENCODING


# === HTTP Configuration ===


class HTTPSettings(BaseModel):
    """HTTP client configuration settings.

    Controls how the transport handles compression, TLS and HTTP versions.
    The request timeout is fixed and deliberately absent here.
    """

    accept_encoding: str = Field(
        default=DEFAULT_ACCEPT_ENCODING,
        description="Accept-Encoding header value sent with every request",
    )

    verify: bool | str = Field(
        default=True,
        description="SSL verification (True/False or path to CA bundle)",
    )

    http2: bool = Field(
        default=False,
        description="Enable HTTP/2 (requires httpx[http2])",
    )


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="auto",
        description="Logging output format: 'console' for development, 'json' for production, 'auto' for automatic selection",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        upper_v = v.upper()
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        lower_v = v.lower()
        valid_formats = ["auto", "console", "json"]
        if lower_v not in valid_formats:
            raise ValueError(
                f"Invalid log format: {v}. Must be one of {valid_formats}"
            )
        return lower_v
