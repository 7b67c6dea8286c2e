"""Google Drive v3 REST client — list, rename, delete, share links."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from orgconsole.config import settings
from orgconsole.exceptions import (
    AuthenticationInvalid,
    AuthenticationMissing,
    NetworkOrServiceFailure,
    NotFound,
)
from orgconsole.schemas.files import FOLDER_MIME_TYPE, FileEntry

logger = logging.getLogger(__name__)

FILE_FIELDS = "id,name,mimeType,webViewLink,parents"


class DriveClient:
    """Thin async wrapper around the Drive REST API.

    The client holds no credential of its own: every call takes the caller's
    bearer token, so one instance serves all users.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        page_size: int | None = None,
    ):
        self._base_url = (base_url or settings.drive_api_url).rstrip("/")
        self._timeout = timeout or settings.drive_timeout_seconds
        self._page_size = page_size or settings.drive_page_size

    async def _request(
        self, method: str, path: str, access_token: str, **kwargs
    ) -> dict[str, Any]:
        """Authenticated request; maps HTTP failures onto console errors."""
        if not access_token:
            raise AuthenticationMissing()

        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(
                    method, f"{self._base_url}{path}",
                    headers=headers, **kwargs,
                )
        except httpx.HTTPError as exc:
            logger.warning("Drive API unreachable (%s %s): %s", method, path, exc)
            raise NetworkOrServiceFailure(f"Drive API is not reachable: {exc}") from exc

        if resp.status_code in (401, 403):
            raise AuthenticationInvalid(_error_message(resp, "Drive rejected the access token"))
        if resp.status_code == 404:
            raise NotFound(_error_message(resp, "File not found"))
        if resp.status_code >= 400:
            raise NetworkOrServiceFailure(
                _error_message(resp, f"Drive API error ({resp.status_code})")
            )
        if resp.status_code == 204 or not resp.content:
            return {}
        return resp.json()

    async def list_files(
        self, access_token: str, folder_id: str | None = None
    ) -> list[FileEntry]:
        """List non-trashed files and folders, optionally inside one folder."""
        query = "trashed = false"
        if folder_id:
            query = f"'{_quote(folder_id)}' in parents and {query}"
        return await self._list(access_token, query)

    async def list_folders(self, access_token: str) -> list[FileEntry]:
        return await self._list(
            access_token, f"mimeType = '{FOLDER_MIME_TYPE}' and trashed = false"
        )

    async def _list(self, access_token: str, query: str) -> list[FileEntry]:
        data = await self._request(
            "GET", "/files", access_token,
            params={
                "q": query,
                "pageSize": self._page_size,
                "fields": f"files({FILE_FIELDS})",
                "orderBy": "folder,name",
            },
        )
        return [FileEntry.model_validate(f) for f in data.get("files", [])]

    async def get_file(self, access_token: str, file_id: str) -> FileEntry:
        data = await self._request(
            "GET", f"/files/{file_id}", access_token,
            params={"fields": FILE_FIELDS},
        )
        return FileEntry.model_validate(data)

    async def rename_file(self, access_token: str, file_id: str, name: str) -> FileEntry:
        data = await self._request(
            "PATCH", f"/files/{file_id}", access_token,
            params={"fields": FILE_FIELDS},
            json={"name": name},
        )
        logger.info("Renamed Drive file %s -> %r", file_id, name)
        return FileEntry.model_validate(data)

    async def delete_file(self, access_token: str, file_id: str) -> None:
        await self._request("DELETE", f"/files/{file_id}", access_token)
        logger.info("Deleted Drive file %s", file_id)

    async def get_file_url(
        self, access_token: str, file_id: str, share: bool | None = None
    ) -> str | None:
        """Return a shareable link, granting "anyone with the link" read first."""
        if share is None:
            share = settings.drive_share_public
        if share:
            await self._request(
                "POST", f"/files/{file_id}/permissions", access_token,
                json={"role": "reader", "type": "anyone"},
            )
        data = await self._request(
            "GET", f"/files/{file_id}", access_token,
            params={"fields": "id,webViewLink"},
        )
        return data.get("webViewLink")


def _error_message(resp: httpx.Response, fallback: str) -> str:
    """Extract Drive's ``error.message`` when the body carries one."""
    try:
        error = resp.json().get("error")
    except (ValueError, AttributeError):
        return fallback
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return fallback


def _quote(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive ``q`` literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")
