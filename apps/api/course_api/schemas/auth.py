"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Identifier/secret pair extracted from a single request."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    secret: str = Field(repr=False)


class AuthPrincipal(BaseModel):
    """Authenticated user resolved for the current request."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    first_name: str
    last_name: str
    email_address: str
