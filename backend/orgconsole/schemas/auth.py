"""Auth schemas — Google OAuth tokens and guard decisions."""

from pydantic import BaseModel


class AuthUrlResponse(BaseModel):
    url: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None


class GuardResponse(BaseModel):
    state: str  # unauthenticated, invalid, authorized
    message: str | None = None
    connect_url: str | None = None
