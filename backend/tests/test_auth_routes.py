"""Tests for auth routes — OAuth connect flow, session cookie, guard endpoint."""

from unittest.mock import AsyncMock, MagicMock, patch
from urllib.parse import parse_qs, urlparse

import pytest
from httpx import AsyncClient
from jose import jwt

from orgconsole.config import settings
from orgconsole.exceptions import AuthenticationInvalid
from orgconsole.services.auth_guard import AuthGuard
from orgconsole.services.oauth_service import create_session_token, read_session_token


def _guard(list_side_effect=None):
    drive = MagicMock()
    drive.list_files = AsyncMock(return_value=[], side_effect=list_side_effect)
    return AuthGuard(drive), drive


class TestSessionToken:
    def test_round_trip(self):
        session = create_session_token("ya29.token", expires_in=3600)
        assert read_session_token(session) == "ya29.token"

    def test_wrong_secret_rejected(self):
        forged = jwt.encode(
            {"sub": "drive", "access_token": "x"},
            "wrong-secret-key",
            algorithm=settings.token_algorithm,
        )
        with pytest.raises(AuthenticationInvalid):
            read_session_token(forged)

    def test_missing_access_token_rejected(self):
        session = jwt.encode({"sub": "drive"}, settings.secret_key, algorithm=settings.token_algorithm)
        with pytest.raises(AuthenticationInvalid):
            read_session_token(session)


@pytest.mark.asyncio
async def test_google_auth_url(client: AsyncClient):
    resp = await client.get("/api/auth/google/url?state=xyz")
    assert resp.status_code == 200
    url = urlparse(resp.json()["url"])
    query = parse_qs(url.query)
    assert query["response_type"] == ["code"]
    assert query["access_type"] == ["offline"]
    assert query["state"] == ["xyz"]
    assert query["redirect_uri"] == [settings.google_redirect_uri]


@pytest.mark.asyncio
async def test_callback_sets_session_cookie(client: AsyncClient):
    token_resp = MagicMock()
    token_resp.status_code = 200
    token_resp.json.return_value = {
        "access_token": "ya29.fresh",
        "token_type": "Bearer",
        "expires_in": 3599,
    }

    with patch("orgconsole.services.oauth_service.httpx.AsyncClient") as mock_client_cls:
        mock_http = AsyncMock()
        mock_http.post = AsyncMock(return_value=token_resp)
        mock_http.__aenter__ = AsyncMock(return_value=mock_http)
        mock_http.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = mock_http

        resp = await client.get("/api/auth/google/callback?code=4/abc")

    assert resp.status_code == 200
    assert resp.json()["access_token"] == "ya29.fresh"
    session = resp.cookies.get(settings.session_cookie_name)
    assert session is not None
    assert read_session_token(session) == "ya29.fresh"
    assert mock_http.post.call_args.kwargs["data"]["code"] == "4/abc"


@pytest.mark.asyncio
async def test_callback_rejected_code(client: AsyncClient):
    token_resp = MagicMock()
    token_resp.status_code = 400
    token_resp.json.return_value = {"error": "invalid_grant", "error_description": "Bad Request"}

    with patch("orgconsole.services.oauth_service.httpx.AsyncClient") as mock_client_cls:
        mock_http = AsyncMock()
        mock_http.post = AsyncMock(return_value=token_resp)
        mock_http.__aenter__ = AsyncMock(return_value=mock_http)
        mock_http.__aexit__ = AsyncMock(return_value=False)
        mock_client_cls.return_value = mock_http

        resp = await client.get("/api/auth/google/callback?code=stale")

    assert resp.status_code == 401
    assert resp.json() == {"success": False, "message": "Bad Request"}


@pytest.mark.asyncio
async def test_guard_without_token_makes_no_call(client: AsyncClient):
    guard, drive = _guard()
    with patch("orgconsole.api.routes.auth.get_auth_guard", return_value=guard):
        resp = await client.get("/api/auth/guard")

    assert resp.status_code == 200
    data = resp.json()
    assert data["state"] == "unauthenticated"
    assert data["connect_url"].startswith(settings.google_auth_url)
    drive.list_files.assert_not_called()


@pytest.mark.asyncio
async def test_guard_invalid_token(client: AsyncClient):
    guard, drive = _guard(list_side_effect=AuthenticationInvalid())
    with patch("orgconsole.api.routes.auth.get_auth_guard", return_value=guard):
        resp = await client.get("/api/auth/guard", headers={"Authorization": "Bearer bad"})

    data = resp.json()
    assert data["state"] == "invalid"
    assert data["message"] == "Failed to load organizational resources"
    assert data["connect_url"] is not None


@pytest.mark.asyncio
async def test_guard_reads_session_cookie(client: AsyncClient):
    guard, drive = _guard()
    client.cookies.set(settings.session_cookie_name, create_session_token("ya29.cookie"))
    with patch("orgconsole.api.routes.auth.get_auth_guard", return_value=guard):
        resp = await client.get("/api/auth/guard")

    assert resp.json()["state"] == "authorized"
    assert resp.json()["connect_url"] is None
    drive.list_files.assert_awaited_once_with("ya29.cookie")


@pytest.mark.asyncio
async def test_guarded_endpoint_rejects_without_token(client: AsyncClient):
    guard, drive = _guard()
    with patch("orgconsole.api.deps.get_auth_guard", return_value=guard):
        resp = await client.get("/api/management")

    assert resp.status_code == 401
    assert resp.json()["success"] is False
    drive.list_files.assert_not_called()


@pytest.mark.asyncio
async def test_guarded_endpoint_rejects_invalid_token(client: AsyncClient):
    guard, _ = _guard(list_side_effect=RuntimeError("boom"))
    with patch("orgconsole.api.deps.get_auth_guard", return_value=guard):
        resp = await client.get("/api/periods", headers={"Authorization": "Bearer bad"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Failed to load organizational resources"


@pytest.mark.asyncio
async def test_logout_clears_cookie(client: AsyncClient):
    resp = await client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
