"""File table controller — list, filter, rename, delete and copy-URL workflow.

State lives in a frozen ``FileTableState``. Every user action is a pure
transition function over that state; ``FileTableController`` applies the
transitions around the awaited calls to the Server Action Layer.

Mutations never update the snapshot optimistically: after a successful
rename or delete the file list is fetched again, exactly once.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Awaitable, Callable, Literal, Optional, Protocol

from orgconsole.config import settings
from orgconsole.schemas.files import ActionResponse, FileEntry, FolderOption
from orgconsole.services.console_client import ConsoleApiError
from orgconsole.services.folder_preference import FolderPreferenceStore
from orgconsole.utils.drive import ROOT_FOLDER_ID, FileFilter, filter_entries, folder_options

logger = logging.getLogger(__name__)

LoadingKey = Literal["files", "folders", "operations"]

Prompt = Callable[[str], Awaitable[Optional[str]]]
Clipboard = Callable[[str], Awaitable[None]]


class ActionClient(Protocol):
    async def fetch_files(self, folder_id: str | None = None) -> list[FileEntry]: ...

    async def fetch_folders(self) -> list[FileEntry]: ...

    async def call_api(
        self,
        action: str,
        file_id: str | None = None,
        file_name: str | None = None,
        folder_id: str | None = None,
    ) -> ActionResponse: ...


@dataclass(frozen=True)
class LoadingState:
    files: bool = False
    folders: bool = False
    operations: bool = False


@dataclass(frozen=True)
class DeleteConfirmation:
    is_open: bool = False
    file_id: str | None = None
    file_name: str = ""


@dataclass(frozen=True)
class FileTableState:
    files: tuple[FileEntry, ...] = ()
    folders: tuple[FileEntry, ...] = ()
    loading: LoadingState = field(default_factory=LoadingState)
    error: str | None = None
    delete_confirmation: DeleteConfirmation = field(default_factory=DeleteConfirmation)
    filter: FileFilter = FileFilter.ALL
    copied_file_id: str | None = None
    selected_folder_id: str = ROOT_FOLDER_ID


# --- Transitions ---


def start_request(
    state: FileTableState, key: LoadingKey, clear_error: bool = True
) -> FileTableState:
    """Raise one loading flag and, by default, clear the error slot."""
    loading = replace(state.loading, **{key: True})
    if clear_error:
        return replace(state, loading=loading, error=None)
    return replace(state, loading=loading)


def finish_request(state: FileTableState, key: LoadingKey) -> FileTableState:
    return replace(state, loading=replace(state.loading, **{key: False}))


def fail(state: FileTableState, message: str) -> FileTableState:
    """Most recent error wins; there is no error history."""
    return replace(state, error=message)


def files_loaded(state: FileTableState, files: list[FileEntry]) -> FileTableState:
    return replace(state, files=tuple(files))


def folders_loaded(state: FileTableState, folders: list[FileEntry]) -> FileTableState:
    return replace(state, folders=tuple(folders))


def set_filter(state: FileTableState, selection: FileFilter | str) -> FileTableState:
    return replace(state, filter=FileFilter(selection))


def select_folder(state: FileTableState, folder_id: str) -> FileTableState:
    return replace(state, selected_folder_id=folder_id)


def open_delete_confirmation(
    state: FileTableState, file_id: str, file_name: str | None
) -> FileTableState:
    return replace(
        state,
        delete_confirmation=DeleteConfirmation(
            is_open=True, file_id=file_id, file_name=file_name or "this file"
        ),
    )


def close_delete_confirmation(state: FileTableState) -> FileTableState:
    return replace(state, delete_confirmation=DeleteConfirmation())


def mark_copied(state: FileTableState, file_id: str) -> FileTableState:
    return replace(state, copied_file_id=file_id)


def clear_copied(state: FileTableState) -> FileTableState:
    return replace(state, copied_file_id=None)


def visible_files(state: FileTableState) -> list[FileEntry]:
    return filter_entries(state.files, state.filter)


def _message(exc: Exception, fallback: str) -> str:
    return str(exc) or fallback


# --- Controller ---


class FileTableController:
    """Mediates user actions on the Drive file table.

    ``prompt`` collects the new name for a rename (None means cancelled),
    ``clipboard`` receives copied URLs. Both are injected so the controller
    runs the same behind a terminal, a test or a UI bridge.
    """

    def __init__(
        self,
        client: ActionClient,
        prompt: Prompt,
        clipboard: Clipboard,
        preferences: FolderPreferenceStore | None = None,
        copied_display_seconds: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self._client = client
        self._prompt = prompt
        self._clipboard = clipboard
        self._preferences = preferences
        self._copied_display_seconds = (
            settings.copied_display_seconds
            if copied_display_seconds is None
            else copied_display_seconds
        )
        self._sleep = sleep
        self._state = FileTableState()
        self._revert_task: asyncio.Task | None = None

    @property
    def state(self) -> FileTableState:
        return self._state

    def visible_files(self) -> list[FileEntry]:
        return visible_files(self._state)

    def folder_options(self) -> list[FolderOption]:
        return folder_options(self._state.folders)

    async def mount(self) -> None:
        """Restore the folder preference and fetch files and folders independently."""
        if self._preferences is not None:
            self._state = select_folder(self._state, self._preferences.load_or_default())
        self._state = replace(self._state, error=None)
        # Neither fetch clears the other's error
        await asyncio.gather(
            self.fetch_files(clear_error=False),
            self.fetch_folders(clear_error=False),
        )

    async def fetch_files(self, clear_error: bool = True) -> None:
        self._state = start_request(self._state, "files", clear_error)
        try:
            files = await self._client.fetch_files()
            self._state = files_loaded(self._state, files)
        except Exception as exc:
            logger.warning("Error fetching files: %s", exc)
            self._state = fail(self._state, _message(exc, "Failed to load files. Please try again."))
        finally:
            self._state = finish_request(self._state, "files")

    async def fetch_folders(self, clear_error: bool = True) -> None:
        self._state = start_request(self._state, "folders", clear_error)
        try:
            folders = await self._client.fetch_folders()
            self._state = folders_loaded(self._state, folders)
        except Exception as exc:
            logger.warning("Error fetching folders: %s", exc)
            self._state = fail(
                self._state, _message(exc, "Failed to load folders. Please try again.")
            )
        finally:
            self._state = finish_request(self._state, "folders")

    def set_filter(self, selection: FileFilter | str) -> None:
        self._state = set_filter(self._state, selection)

    def select_folder(self, folder_id: str) -> None:
        self._state = select_folder(self._state, folder_id)
        if self._preferences is not None and folder_id:
            self._preferences.save(folder_id)

    async def _run_operation(
        self, operation: Callable[[], Awaitable[object]], success_message: str | None = None
    ) -> bool:
        """Run a mutation, then re-fetch the list once. Returns True on success."""
        self._state = start_request(self._state, "operations")
        try:
            await operation()
            await self.fetch_files()
            if success_message:
                logger.info(success_message)
            return True
        except Exception as exc:
            logger.warning("Operation error: %s", exc)
            self._state = fail(self._state, _message(exc, "Operation failed. Please try again."))
            return False
        finally:
            self._state = finish_request(self._state, "operations")

    async def rename(self, file_id: str | None) -> None:
        if not file_id:
            return

        new_name = await self._prompt("Enter new name:")
        if not new_name or not new_name.strip():
            return

        await self._run_operation(
            lambda: self._client.call_api("rename", file_id=file_id, file_name=new_name),
            "File renamed successfully",
        )

    def request_delete(self, file_id: str | None, file_name: str | None = None) -> None:
        if not file_id:
            return
        self._state = open_delete_confirmation(self._state, file_id, file_name)

    def cancel_delete(self) -> None:
        self._state = close_delete_confirmation(self._state)

    async def confirm_delete(self) -> None:
        file_id = self._state.delete_confirmation.file_id
        if not file_id:
            return

        try:
            await self._run_operation(
                lambda: self._client.call_api("delete", file_id=file_id),
                "File deleted successfully",
            )
        finally:
            self._state = close_delete_confirmation(self._state)

    async def copy_url(self, file_id: str | None) -> None:
        if not file_id:
            return

        self._state = start_request(self._state, "operations")
        try:
            res = await self._client.call_api("getUrl", file_id=file_id)
            if not (res.success and res.url):
                raise ConsoleApiError(res.message or "Failed to get file URL")
            await self._clipboard(res.url)
            self._state = mark_copied(self._state, file_id)
            self._schedule_copied_revert()
        except Exception as exc:
            logger.warning("Error copying URL: %s", exc)
            self._state = fail(self._state, _message(exc, "Failed to copy URL. Please try again."))
        finally:
            self._state = finish_request(self._state, "operations")

    def _schedule_copied_revert(self) -> None:
        # A newer copy owns the display window
        if self._revert_task is not None and not self._revert_task.done():
            self._revert_task.cancel()
        self._revert_task = asyncio.create_task(self._revert_copied())

    async def _revert_copied(self) -> None:
        await self._sleep(self._copied_display_seconds)
        self._state = clear_copied(self._state)

    async def close(self) -> None:
        """Cancel a pending copied-state revert."""
        if self._revert_task is not None and not self._revert_task.done():
            self._revert_task.cancel()
            try:
                await self._revert_task
            except asyncio.CancelledError:
                pass
        self._revert_task = None
