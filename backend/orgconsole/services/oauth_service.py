"""Google OAuth2 connect flow and the signed session cookie."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt

from orgconsole.config import settings
from orgconsole.exceptions import AuthenticationInvalid, NetworkOrServiceFailure
from orgconsole.schemas.auth import TokenResponse

logger = logging.getLogger(__name__)


def build_authorization_url(state: str | None = None) -> str:
    """Consent screen URL for the configured OAuth client."""
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "response_type": "code",
        "scope": " ".join(settings.google_scopes),
        "access_type": "offline",
        "prompt": "consent",
    }
    if state:
        params["state"] = state
    return f"{settings.google_auth_url}?{urlencode(params)}"


async def exchange_code(code: str) -> TokenResponse:
    """Trade an authorization code for tokens at Google's token endpoint."""
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.post(
                settings.google_token_url,
                data={
                    "code": code,
                    "client_id": settings.google_client_id,
                    "client_secret": settings.google_client_secret,
                    "redirect_uri": settings.google_redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
    except httpx.HTTPError as exc:
        logger.warning("Google token endpoint unreachable: %s", exc)
        raise NetworkOrServiceFailure("Google is not reachable. Try connecting again.") from exc

    if resp.status_code != 200:
        detail = "Authorization code was rejected"
        try:
            detail = resp.json().get("error_description", detail)
        except (ValueError, AttributeError):
            pass
        raise AuthenticationInvalid(detail)

    return TokenResponse(**resp.json())


def create_session_token(access_token: str, expires_in: int | None = None) -> str:
    """Wrap a Drive access token in a signed JWT for the session cookie."""
    lifetime = timedelta(seconds=expires_in) if expires_in else timedelta(
        minutes=settings.session_expire_minutes
    )
    payload = {
        "sub": "drive",
        "access_token": access_token,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.token_algorithm)


def read_session_token(session: str) -> str:
    """Return the access token from a session cookie, or raise AuthenticationInvalid."""
    try:
        payload = jwt.decode(
            session,
            settings.secret_key,
            algorithms=[settings.token_algorithm],
        )
    except JWTError:
        raise AuthenticationInvalid("Session is invalid or expired")

    access_token = payload.get("access_token")
    if not access_token:
        raise AuthenticationInvalid("Session carries no access token")
    return access_token
