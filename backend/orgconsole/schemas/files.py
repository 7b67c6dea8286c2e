"""Drive file schemas — File Entry snapshot and the action envelope."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class FileEntry(BaseModel):
    """Read-only snapshot of one Drive file or folder."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    mime_type: str = Field("", alias="mimeType")
    web_view_link: str | None = Field(None, alias="webViewLink")
    parents: list[str] = []

    @property
    def is_folder(self) -> bool:
        return "folder" in self.mime_type


class FolderOption(BaseModel):
    id: str
    name: str


class ActionRequest(BaseModel):
    """Multiplexed Server Action Layer request."""
    model_config = ConfigDict(populate_by_name=True)

    action: str
    file_id: str | None = Field(None, alias="fileId")
    file_name: str | None = Field(None, alias="fileName")
    folder_id: str | None = Field(None, alias="folderId")
    access_token: str = Field("", alias="accessToken")


class ActionResponse(BaseModel):
    """Uniform response envelope for every drive action."""
    success: bool
    message: str | None = None
    url: str | None = None
    data: Any = None
