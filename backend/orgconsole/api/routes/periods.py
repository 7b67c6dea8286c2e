"""Period routes — search/filter listing, CRUD and bulk delete."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from orgconsole.api.deps import require_drive_access
from orgconsole.api.errors import failure_response
from orgconsole.database import get_db
from orgconsole.exceptions import ConsoleError
from orgconsole.schemas.common import ApiResponse
from orgconsole.schemas.period import BulkDeleteRequest, PeriodIn, PeriodOut
from orgconsole.services.period_service import PeriodService

logger = logging.getLogger(__name__)
router = APIRouter()


def _out(period) -> dict:
    return PeriodOut.model_validate(period).model_dump(mode="json")


@router.get("", response_model=ApiResponse)
async def list_periods(
    search: str = "",
    status: str = "all",
    db: AsyncSession = Depends(get_db),
    _token: str = Depends(require_drive_access),
):
    try:
        periods = await PeriodService(db).search(search, status)
    except Exception as exc:
        logger.exception("Error listing periods")
        return failure_response(500, str(exc) or "Failed to fetch periods")
    return ApiResponse(data=[_out(p) for p in periods])


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_period(body: PeriodIn, db: AsyncSession = Depends(get_db)):
    try:
        period = await PeriodService(db).create(body)
    except Exception as exc:
        logger.exception("Error creating period")
        return failure_response(500, str(exc) or "Failed to create period")
    return ApiResponse(data=_out(period), message="Period created successfully")


@router.post("/bulk-delete", response_model=ApiResponse)
async def bulk_delete_periods(body: BulkDeleteRequest, db: AsyncSession = Depends(get_db)):
    try:
        deleted = await PeriodService(db).delete_many(body.ids)
    except Exception as exc:
        logger.exception("Error bulk deleting periods")
        return failure_response(500, str(exc) or "Failed to delete periods")
    return ApiResponse(message=f"{deleted} period(s) deleted", data={"deleted": deleted})


@router.get("/{period_id}", response_model=ApiResponse)
async def get_period(period_id: str, db: AsyncSession = Depends(get_db)):
    try:
        period = await PeriodService(db).get(period_id)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error fetching period %s", period_id)
        return failure_response(500, str(exc) or "Failed to fetch period")
    return ApiResponse(data=_out(period))


@router.put("/{period_id}", response_model=ApiResponse)
async def update_period(period_id: str, body: PeriodIn, db: AsyncSession = Depends(get_db)):
    try:
        period = await PeriodService(db).update(period_id, body)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error updating period %s", period_id)
        return failure_response(500, str(exc) or "Failed to update period")
    return ApiResponse(data=_out(period), message="Period updated successfully")


@router.delete("/{period_id}", response_model=ApiResponse)
async def delete_period(period_id: str, db: AsyncSession = Depends(get_db)):
    try:
        await PeriodService(db).delete(period_id)
    except ConsoleError:
        raise
    except Exception as exc:
        logger.exception("Error deleting period %s", period_id)
        return failure_response(500, str(exc) or "Failed to delete period")
    return ApiResponse(message="Period deleted successfully")
