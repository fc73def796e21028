"""Token models shared by the auth service and request dependencies."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Validated claims of an access token."""

    token: str = Field(description="Raw token string", repr=False)
    subject: str = Field(description="Subject (user id)")
    username: str | None = Field(default=None, description="Username claim")
    issuer: str = Field(description="Token issuer")
    audience: str | list[str] = Field(description="Token audience")
    expires_at: int = Field(description="Expiration timestamp")
    issued_at: int = Field(description="Issued at timestamp")
    jti: str | None = Field(default=None, description="JWT ID")
    custom_claims: dict[str, Any] = Field(default_factory=dict)


class AccessToken(BaseModel):
    """Body returned by a successful login."""

    user_id: str
    username: str
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
