"""Management record store — CRUD plus best-effort photo cleanup on delete."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orgconsole.exceptions import NotFound
from orgconsole.models.management import Management
from orgconsole.schemas.management import ManagementIn
from orgconsole.services.drive_service import DriveClient
from orgconsole.utils.drive import extract_file_id

logger = logging.getLogger(__name__)

DRIVE_FILE_MARKER = "drive.google.com/file/d/"


class ManagementService:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def list_all(self, period_id: str | None = None) -> list[Management]:
        stmt = select(Management).order_by(Management.order, Management.name)
        if period_id:
            stmt = stmt.where(Management.period_id == period_id)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, record_id: str) -> Management:
        record = await self._db.get(Management, record_id)
        if record is None:
            raise NotFound(f"Management {record_id} not found")
        return record

    async def create(self, data: ManagementIn) -> Management:
        record = Management(id=str(uuid.uuid4()), **data.model_dump())
        self._db.add(record)
        await self._db.commit()
        await self._db.refresh(record)
        logger.info("Created management %s (%s)", record.id, record.name)
        return record

    async def update(self, record_id: str, data: ManagementIn) -> Management:
        """Replace every field with the submitted full record."""
        record = await self.get(record_id)
        for field, value in data.model_dump().items():
            setattr(record, field, value)
        await self._db.commit()
        await self._db.refresh(record)
        return record

    async def delete(
        self,
        record_id: str,
        drive: DriveClient | None = None,
        access_token: str | None = None,
    ) -> None:
        """Delete a record, first trying to remove its Drive photo.

        Photo removal needs both a client and a credential. Its failure is
        logged and never blocks the record delete; no cleanup is retried.
        """
        record = await self.get(record_id)

        photo = record.photo or ""
        if DRIVE_FILE_MARKER in photo and drive is not None and access_token:
            file_id = extract_file_id(photo)
            if file_id:
                try:
                    await drive.delete_file(access_token, file_id)
                except Exception as exc:
                    logger.warning(
                        "Failed to delete photo %s of management %s: %s",
                        file_id, record_id, exc,
                    )

        await self._db.delete(record)
        await self._db.commit()
        logger.info("Deleted management %s", record_id)
