"""Server Action Layer — validates a multiplexed drive action and forwards it."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from orgconsole.exceptions import AuthenticationMissing, ValidationFailure
from orgconsole.schemas.files import ActionRequest, ActionResponse
from orgconsole.services.drive_service import DriveClient

logger = logging.getLogger(__name__)

# Actions that address a single file
_FILE_ACTIONS = {"get", "rename", "delete", "getUrl"}


class DriveActionService:
    """Dispatches ``ActionRequest`` onto ``DriveClient`` calls.

    No business logic lives here beyond parameter validation and credential
    forwarding. Errors from the client propagate as ``ConsoleError`` and are
    rendered into the envelope by the API layer.
    """

    def __init__(self, drive: DriveClient):
        self._drive = drive
        self._handlers: dict[str, Callable[[ActionRequest], Awaitable[ActionResponse]]] = {
            "list": self._list,
            "listFolders": self._list_folders,
            "get": self._get,
            "rename": self._rename,
            "delete": self._delete,
            "getUrl": self._get_url,
        }

    @property
    def actions(self) -> list[str]:
        return list(self._handlers)

    async def dispatch(self, req: ActionRequest) -> ActionResponse:
        if not req.access_token:
            raise AuthenticationMissing()

        handler = self._handlers.get(req.action)
        if handler is None:
            raise ValidationFailure(f"Unknown action: {req.action!r}")
        if req.action in _FILE_ACTIONS and not req.file_id:
            raise ValidationFailure(f"fileId is required for action {req.action!r}")

        logger.debug("Drive action %s (file=%s)", req.action, req.file_id)
        return await handler(req)

    async def _list(self, req: ActionRequest) -> ActionResponse:
        files = await self._drive.list_files(req.access_token, req.folder_id)
        return ActionResponse(success=True, data=[f.model_dump(by_alias=True) for f in files])

    async def _list_folders(self, req: ActionRequest) -> ActionResponse:
        folders = await self._drive.list_folders(req.access_token)
        return ActionResponse(success=True, data=[f.model_dump(by_alias=True) for f in folders])

    async def _get(self, req: ActionRequest) -> ActionResponse:
        entry = await self._drive.get_file(req.access_token, req.file_id)
        return ActionResponse(success=True, data=entry.model_dump(by_alias=True))

    async def _rename(self, req: ActionRequest) -> ActionResponse:
        name = (req.file_name or "").strip()
        if not name:
            raise ValidationFailure("fileName must not be empty")
        entry = await self._drive.rename_file(req.access_token, req.file_id, name)
        return ActionResponse(
            success=True,
            message="File renamed successfully",
            data=entry.model_dump(by_alias=True),
        )

    async def _delete(self, req: ActionRequest) -> ActionResponse:
        await self._drive.delete_file(req.access_token, req.file_id)
        return ActionResponse(success=True, message="File deleted successfully")

    async def _get_url(self, req: ActionRequest) -> ActionResponse:
        url = await self._drive.get_file_url(req.access_token, req.file_id)
        if not url:
            return ActionResponse(success=False, message="File has no shareable URL")
        return ActionResponse(success=True, url=url)
