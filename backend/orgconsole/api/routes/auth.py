"""Auth routes — Google OAuth connect flow, session cookie, guard status."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from orgconsole.api.deps import get_access_token
from orgconsole.config import settings
from orgconsole.schemas.auth import AuthUrlResponse, GuardResponse, TokenResponse
from orgconsole.services import get_auth_guard
from orgconsole.services.auth_guard import GuardState
from orgconsole.services.oauth_service import (
    build_authorization_url,
    create_session_token,
    exchange_code,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/google/url", response_model=AuthUrlResponse)
async def google_auth_url(state: Optional[str] = None):
    """Consent screen URL for connecting a Drive account."""
    return AuthUrlResponse(url=build_authorization_url(state))


@router.get("/google/callback", response_model=TokenResponse)
async def google_callback(response: Response, code: str = Query(..., min_length=1)):
    """
    Exchange the authorization code and start a console session.

    The access token is returned to the caller and also stored, signed, in
    the session cookie so browser requests need no Authorization header.
    """
    token = await exchange_code(code)
    response.set_cookie(
        settings.session_cookie_name,
        create_session_token(token.access_token, token.expires_in),
        max_age=token.expires_in or settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=not settings.debug,
    )
    logger.info("Drive account connected")
    return token


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return {"success": True, "message": "Disconnected"}


@router.get("/guard", response_model=GuardResponse)
async def guard_status(token: Optional[str] = Depends(get_access_token)):
    """Run the auth guard and report which view the console should render."""
    decision = await get_auth_guard().check(token)
    connect_url = None
    if decision.state != GuardState.AUTHORIZED:
        connect_url = build_authorization_url()
    return GuardResponse(
        state=decision.state.value,
        message=decision.message,
        connect_url=connect_url,
    )
