"""HTTP client for the Server Action Layer, used by the file table controller."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from orgconsole.config import settings
from orgconsole.schemas.files import ActionResponse, FileEntry

logger = logging.getLogger(__name__)


class ConsoleApiError(Exception):
    """The action endpoint failed or answered with a non-2xx envelope."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ConsoleApiClient:
    """Posts drive actions to ``/drive/action`` with the caller's credential."""

    def __init__(self, access_token: str, base_url: str | None = None, timeout: float = 10.0):
        self._access_token = access_token
        self._base_url = (base_url or settings.console_api_url).rstrip("/")
        self._timeout = timeout

    async def call_api(
        self,
        action: str,
        file_id: str | None = None,
        file_name: str | None = None,
        folder_id: str | None = None,
    ) -> ActionResponse:
        body: dict[str, Any] = {"action": action, "accessToken": self._access_token}
        if file_id is not None:
            body["fileId"] = file_id
        if file_name is not None:
            body["fileName"] = file_name
        if folder_id is not None:
            body["folderId"] = folder_id

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(f"{self._base_url}/drive/action", json=body)
        except httpx.HTTPError as exc:
            raise ConsoleApiError(f"Console API is not reachable: {exc}") from exc

        try:
            payload = resp.json()
        except ValueError:
            payload = {}

        if resp.status_code >= 400:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ConsoleApiError(
                message or f"Request failed ({resp.status_code})", resp.status_code
            )
        return ActionResponse.model_validate(payload)

    async def fetch_files(self, folder_id: str | None = None) -> list[FileEntry]:
        res = await self.call_api("list", folder_id=folder_id)
        return _entries(res)

    async def fetch_folders(self) -> list[FileEntry]:
        res = await self.call_api("listFolders")
        return _entries(res)


def _entries(res: ActionResponse) -> list[FileEntry]:
    if not res.success:
        raise ConsoleApiError(res.message or "Listing failed")
    return [FileEntry.model_validate(item) for item in res.data or []]
