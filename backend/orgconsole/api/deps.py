"""FastAPI dependency injection — Drive credential resolution and the auth guard."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2AuthorizationCodeBearer

from orgconsole.config import settings
from orgconsole.exceptions import AuthenticationInvalid, AuthenticationMissing
from orgconsole.services import get_auth_guard
from orgconsole.services.auth_guard import GuardState
from orgconsole.services.oauth_service import read_session_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2AuthorizationCodeBearer(
    authorizationUrl=settings.google_auth_url,
    tokenUrl=settings.google_token_url,
    auto_error=False,
)


async def get_access_token(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    """Bearer header first, then the signed session cookie. None if neither is present."""
    if token:
        return token

    session = request.cookies.get(settings.session_cookie_name)
    if not session:
        return None
    return read_session_token(session)


async def get_access_token_optional(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[str]:
    """Like get_access_token, but an unreadable session yields None."""
    try:
        return await get_access_token(request, token)
    except AuthenticationInvalid as exc:
        logger.debug("Ignoring unreadable session: %s", exc)
        return None


async def require_access_token(token: Optional[str] = Depends(get_access_token)) -> str:
    if not token:
        raise AuthenticationMissing()
    return token


async def require_drive_access(token: Optional[str] = Depends(get_access_token)) -> str:
    """Guard protected content: the credential must pass one Drive validation call."""
    decision = await get_auth_guard().check(token)
    if decision.state == GuardState.UNAUTHENTICATED:
        raise AuthenticationMissing(decision.message)
    if not decision.authorized:
        raise AuthenticationInvalid(decision.message)
    return token
