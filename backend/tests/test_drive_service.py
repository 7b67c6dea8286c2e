"""Tests for the Drive REST client — with mocked httpx."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from orgconsole.exceptions import (
    AuthenticationInvalid,
    AuthenticationMissing,
    NetworkOrServiceFailure,
    NotFound,
)
from orgconsole.services.drive_service import DriveClient


def _response(status_code: int = 200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.content = b"{}" if payload is not None else b""
    resp.json.return_value = payload if payload is not None else {}
    return resp


def _mock_http(mock_client_cls, *responses):
    mock_http = AsyncMock()
    mock_http.request = AsyncMock(side_effect=list(responses))
    mock_http.__aenter__ = AsyncMock(return_value=mock_http)
    mock_http.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_http
    return mock_http


@pytest.fixture
def drive():
    return DriveClient(base_url="https://drive.test/v3", timeout=5.0, page_size=50)


class TestListing:
    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_list_files_parses_entries(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {"files": [
            {"id": "f1", "name": "report.pdf", "mimeType": "application/pdf"},
            {"id": "d1", "name": "Photos", "mimeType": "application/vnd.google-apps.folder"},
        ]}))

        files = await drive.list_files("tok")

        assert [f.id for f in files] == ["f1", "d1"]
        assert files[1].is_folder is True
        method, url = mock_http.request.call_args.args
        assert method == "GET"
        assert url == "https://drive.test/v3/files"
        kwargs = mock_http.request.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert kwargs["params"]["q"] == "trashed = false"
        assert kwargs["params"]["pageSize"] == 50

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_list_files_in_folder(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {"files": []}))

        await drive.list_files("tok", folder_id="abc")

        query = mock_http.request.call_args.kwargs["params"]["q"]
        assert query == "'abc' in parents and trashed = false"

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_list_files_escapes_folder_id(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {"files": []}))

        await drive.list_files("tok", folder_id="x' or name contains '\\")

        query = mock_http.request.call_args.kwargs["params"]["q"]
        assert query == "'x\\' or name contains \\'\\\\' in parents and trashed = false"

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_list_folders_filters_mime_type(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {"files": []}))

        assert await drive.list_folders("tok") == []
        query = mock_http.request.call_args.kwargs["params"]["q"]
        assert "application/vnd.google-apps.folder" in query


class TestMutations:
    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_rename_patches_name(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {
            "id": "f1", "name": "new.pdf", "mimeType": "application/pdf",
        }))

        entry = await drive.rename_file("tok", "f1", "new.pdf")

        assert entry.name == "new.pdf"
        method, url = mock_http.request.call_args.args
        assert (method, url) == ("PATCH", "https://drive.test/v3/files/f1")
        assert mock_http.request.call_args.kwargs["json"] == {"name": "new.pdf"}

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_delete_accepts_empty_body(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(204))

        await drive.delete_file("tok", "f1")

        method, url = mock_http.request.call_args.args
        assert (method, url) == ("DELETE", "https://drive.test/v3/files/f1")

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_get_url_shares_then_reads_link(self, mock_client_cls, drive):
        mock_http = _mock_http(
            mock_client_cls,
            _response(200, {"id": "perm-1"}),
            _response(200, {"id": "f1", "webViewLink": "https://drive.google.com/file/d/f1/view"}),
        )

        url = await drive.get_file_url("tok", "f1", share=True)

        assert url == "https://drive.google.com/file/d/f1/view"
        first, second = mock_http.request.call_args_list
        assert first.args == ("POST", "https://drive.test/v3/files/f1/permissions")
        assert first.kwargs["json"] == {"role": "reader", "type": "anyone"}
        assert second.args == ("GET", "https://drive.test/v3/files/f1")

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_get_url_without_sharing(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls, _response(200, {"id": "f1"}))

        assert await drive.get_file_url("tok", "f1", share=False) is None
        assert mock_http.request.call_count == 1


class TestErrors:
    @pytest.mark.asyncio
    async def test_missing_token_never_calls_api(self, drive):
        with patch("orgconsole.services.drive_service.httpx.AsyncClient") as mock_client_cls:
            with pytest.raises(AuthenticationMissing):
                await drive.list_files("")
        mock_client_cls.assert_not_called()

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_unauthorized_maps_to_invalid(self, mock_client_cls, drive):
        _mock_http(mock_client_cls, _response(401, {"error": {"message": "Invalid Credentials"}}))

        with pytest.raises(AuthenticationInvalid) as exc_info:
            await drive.list_files("expired")
        assert exc_info.value.message == "Invalid Credentials"

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_not_found(self, mock_client_cls, drive):
        _mock_http(mock_client_cls, _response(404, {"error": {"message": "File not found: x."}}))

        with pytest.raises(NotFound):
            await drive.delete_file("tok", "x")

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_server_error_maps_to_service_failure(self, mock_client_cls, drive):
        _mock_http(mock_client_cls, _response(500, {}))

        with pytest.raises(NetworkOrServiceFailure) as exc_info:
            await drive.list_folders("tok")
        assert "500" in exc_info.value.message

    @pytest.mark.asyncio
    @patch("orgconsole.services.drive_service.httpx.AsyncClient")
    async def test_transport_error(self, mock_client_cls, drive):
        mock_http = _mock_http(mock_client_cls)
        mock_http.request = AsyncMock(side_effect=httpx.ConnectError("boom"))

        with pytest.raises(NetworkOrServiceFailure):
            await drive.list_files("tok")
