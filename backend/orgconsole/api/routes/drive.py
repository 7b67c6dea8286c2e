"""Drive routes — the multiplexed Server Action Layer plus listing shortcuts."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from orgconsole.api.deps import get_access_token_optional, require_access_token
from orgconsole.api.errors import failure_response
from orgconsole.exceptions import ConsoleError
from orgconsole.schemas.files import ActionRequest, ActionResponse
from orgconsole.services import get_drive_actions, get_drive_client

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/action", response_model=ActionResponse, response_model_exclude_none=True)
async def drive_action(
    body: ActionRequest,
    fallback_token: Optional[str] = Depends(get_access_token_optional),
):
    """Dispatch one of list, listFolders, get, rename, delete, getUrl.

    The credential comes from ``accessToken`` in the body; a bearer header or
    session cookie is used when the body carries none.
    """
    if not body.access_token and fallback_token:
        body = body.model_copy(update={"access_token": fallback_token})
    try:
        return await get_drive_actions().dispatch(body)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Drive action %s failed", body.action)
        return failure_response(500, str(exc) or "Drive action failed")


@router.get("/files", response_model=ActionResponse, response_model_exclude_none=True)
async def list_files(
    folder_id: Optional[str] = None,
    token: str = Depends(require_access_token),
):
    try:
        files = await get_drive_client().list_files(token, folder_id)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error listing Drive files")
        return failure_response(500, str(exc) or "Failed to load files")
    return ActionResponse(success=True, data=[f.model_dump(by_alias=True) for f in files])


@router.get("/folders", response_model=ActionResponse, response_model_exclude_none=True)
async def list_folders(token: str = Depends(require_access_token)):
    try:
        folders = await get_drive_client().list_folders(token)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error listing Drive folders")
        return failure_response(500, str(exc) or "Failed to load folders")
    return ActionResponse(success=True, data=[f.model_dump(by_alias=True) for f in folders])
