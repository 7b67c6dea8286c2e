"""Tests for the Server Action Layer HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from orgconsole.services.console_client import ConsoleApiClient, ConsoleApiError


def _mock_http(mock_client_cls, status_code=200, payload=None, side_effect=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload if payload is not None else {}
    mock_http = AsyncMock()
    mock_http.post = AsyncMock(return_value=resp, side_effect=side_effect)
    mock_http.__aenter__ = AsyncMock(return_value=mock_http)
    mock_http.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_http
    return mock_http


@pytest.fixture
def api():
    return ConsoleApiClient("tok", base_url="http://console/api")


@pytest.mark.asyncio
@patch("orgconsole.services.console_client.httpx.AsyncClient")
async def test_call_api_posts_camel_case_body(mock_client_cls, api):
    mock_http = _mock_http(mock_client_cls, payload={"success": True, "message": "ok"})

    res = await api.call_api("rename", file_id="f1", file_name="b.pdf")

    assert res.success is True
    url = mock_http.post.call_args.args[0]
    assert url == "http://console/api/drive/action"
    assert mock_http.post.call_args.kwargs["json"] == {
        "action": "rename", "accessToken": "tok", "fileId": "f1", "fileName": "b.pdf",
    }


@pytest.mark.asyncio
@patch("orgconsole.services.console_client.httpx.AsyncClient")
async def test_error_status_raises_with_message(mock_client_cls, api):
    _mock_http(mock_client_cls, status_code=500, payload={"success": False, "message": "File not found"})

    with pytest.raises(ConsoleApiError) as exc_info:
        await api.call_api("delete", file_id="f1")
    assert str(exc_info.value) == "File not found"
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
@patch("orgconsole.services.console_client.httpx.AsyncClient")
async def test_transport_error(mock_client_cls, api):
    _mock_http(mock_client_cls, side_effect=httpx.ConnectError("refused"))

    with pytest.raises(ConsoleApiError):
        await api.fetch_folders()


@pytest.mark.asyncio
@patch("orgconsole.services.console_client.httpx.AsyncClient")
async def test_fetch_files_parses_entries(mock_client_cls, api):
    _mock_http(mock_client_cls, payload={"success": True, "data": [
        {"id": "f1", "name": "a.pdf", "mimeType": "application/pdf"},
    ]})

    files = await api.fetch_files()
    assert files[0].id == "f1"
    assert files[0].mime_type == "application/pdf"


@pytest.mark.asyncio
@patch("orgconsole.services.console_client.httpx.AsyncClient")
async def test_unsuccessful_listing_raises(mock_client_cls, api):
    _mock_http(mock_client_cls, payload={"success": False, "message": "nope"})

    with pytest.raises(ConsoleApiError, match="nope"):
        await api.fetch_files()
