"""Management record routes — CRUD with Drive photo cleanup on delete."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from orgconsole.api.deps import get_access_token_optional, require_drive_access
from orgconsole.api.errors import failure_response
from orgconsole.database import get_db
from orgconsole.exceptions import ConsoleError
from orgconsole.schemas.common import ApiResponse
from orgconsole.schemas.management import ManagementIn, ManagementOut
from orgconsole.services import get_drive_client
from orgconsole.services.management_service import ManagementService

logger = logging.getLogger(__name__)
router = APIRouter()


def _out(record) -> dict:
    return ManagementOut.model_validate(record).model_dump(mode="json")


@router.get("", response_model=ApiResponse)
async def list_management(
    period_id: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    _token: str = Depends(require_drive_access),
):
    try:
        records = await ManagementService(db).list_all(period_id)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error listing management")
        return failure_response(500, str(exc) or "Failed to fetch management")
    return ApiResponse(data=[_out(r) for r in records])


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_management(body: ManagementIn, db: AsyncSession = Depends(get_db)):
    try:
        record = await ManagementService(db).create(body)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error creating management")
        return failure_response(500, str(exc) or "Failed to create management")
    return ApiResponse(data=_out(record), message="Management created successfully")


@router.get("/{record_id}", response_model=ApiResponse)
async def get_management(record_id: str, db: AsyncSession = Depends(get_db)):
    try:
        record = await ManagementService(db).get(record_id)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error fetching management %s", record_id)
        return failure_response(500, str(exc) or "Failed to fetch management")
    return ApiResponse(data=_out(record))


@router.put("/{record_id}", response_model=ApiResponse)
async def update_management(
    record_id: str,
    body: ManagementIn,
    db: AsyncSession = Depends(get_db),
):
    try:
        record = await ManagementService(db).update(record_id, body)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error updating management %s", record_id)
        return failure_response(500, str(exc) or "Failed to update management")
    return ApiResponse(data=_out(record), message="Management updated successfully")


@router.delete("/{record_id}", response_model=ApiResponse)
async def delete_management(
    record_id: str,
    db: AsyncSession = Depends(get_db),
    token: Optional[str] = Depends(get_access_token_optional),
):
    """Delete a record; its Drive photo is removed first on a best-effort basis."""
    try:
        drive = get_drive_client()
    except RuntimeError:
        drive = None  # services not initialized

    try:
        await ManagementService(db).delete(record_id, drive=drive, access_token=token)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error deleting management %s", record_id)
        return failure_response(500, str(exc) or "Failed to delete management")
    return ApiResponse(message="Management deleted successfully")
