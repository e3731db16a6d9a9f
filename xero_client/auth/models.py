"""Identity models passed to signers."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Consumer(BaseModel):
    """Application identity registered with the remote API."""

    model_config = ConfigDict(frozen=True)

    consumer_key: str = Field(..., description="Application (consumer) key")
    consumer_secret: SecretStr | None = Field(
        default=None, description="Application (consumer) secret"
    )


class ApiUser(BaseModel):
    """User identity a call is made on behalf of."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="User or session name")
    organisation_id: str | None = Field(
        default=None, description="Organisation (tenant) the user acts for"
    )
