"""Drive helpers — folder detection, view filtering, photo URL parsing."""

from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from orgconsole.schemas.files import FileEntry, FolderOption

ROOT_FOLDER_ID = "root"
ROOT_FOLDER_NAME = "My Drive"

_FILE_PATH_RE = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
_ID_QUERY_RE = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")


class FileFilter(str, Enum):
    ALL = "all"
    FILES = "files"
    FOLDERS = "folders"


def is_folder(mime_type: str | None) -> bool:
    return "folder" in (mime_type or "")


def filter_entries(entries: Iterable[FileEntry], selection: FileFilter) -> list[FileEntry]:
    """Client-side view predicate over a fetched snapshot."""
    if selection == FileFilter.ALL:
        return list(entries)
    if selection == FileFilter.FOLDERS:
        return [e for e in entries if is_folder(e.mime_type)]
    return [e for e in entries if not is_folder(e.mime_type)]


def folder_options(folders: Iterable[FileEntry]) -> list[FolderOption]:
    """Selectable folders, Drive root first."""
    options = [FolderOption(id=ROOT_FOLDER_ID, name=ROOT_FOLDER_NAME)]
    options.extend(FolderOption(id=f.id, name=f.name) for f in folders)
    return options


def extract_file_id(url: str | None) -> str | None:
    """Pull the Drive file id out of a share link.

    Handles ``https://drive.google.com/file/d/<id>/view`` and the
    ``uc?export=view&id=<id>`` form used for embedded images. Returns None
    for anything that is not a Drive link.
    """
    if not url or "drive.google.com" not in url:
        return None
    match = _FILE_PATH_RE.search(url)
    if match is None:
        match = _ID_QUERY_RE.search(url)
    return match.group(1) if match else None
