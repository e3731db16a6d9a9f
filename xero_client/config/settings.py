from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xero_client.exceptions import ConfigurationError

from .constants import DEFAULT_BASE_URL
from .core import HTTPSettings, LoggingSettings


__all__ = ["Settings", "ConfigurationError", "get_settings"]


class Settings(BaseSettings):
    """
    Configuration settings for the Xero API client.

    Settings are loaded from environment variables prefixed with ``XERO_CLIENT_``
    and from a ``.env`` file. Environment variables take precedence over .env
    file values. Nested sections use ``__`` as delimiter, e.g.
    ``XERO_CLIENT_LOGGING__LEVEL=DEBUG``.
    """

    model_config = SettingsConfigDict(
        env_prefix="XERO_CLIENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base address of the remote API",
    )

    user_agent: str | None = Field(
        default=None,
        description="User-Agent override; defaults to one embedding the consumer key",
    )

    consumer_key: str | None = Field(
        default=None,
        description="Application (consumer) key",
    )

    consumer_secret: SecretStr | None = Field(
        default=None,
        description="Application (consumer) secret",
    )

    access_token: SecretStr | None = Field(
        default=None,
        description="Bearer token used by the bundled signer",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v

    def model_dump_safe(self) -> dict[str, object]:
        """
        Dump model data with sensitive information masked.

        Returns:
            dict: Configuration with secrets masked
        """
        return self.model_dump(mode="json")


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.

    Raises:
        ConfigurationError: If the environment holds invalid values
    """
    try:
        return Settings()
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
