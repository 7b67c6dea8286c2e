"""Period store — search, status filter, bulk delete."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from orgconsole.exceptions import NotFound
from orgconsole.models.management import Management
from orgconsole.models.period import Period
from orgconsole.schemas.period import PeriodIn

logger = logging.getLogger(__name__)


class PeriodService:
    def __init__(self, db: AsyncSession):
        self._db = db

    async def search(self, term: str = "", status: str = "all") -> list[Period]:
        """Case-insensitive name search; status ``all`` disables the filter."""
        stmt = select(Period).order_by(Period.start_year.desc(), Period.name)
        term = term.strip()
        if term:
            stmt = stmt.where(Period.name.ilike(f"%{term}%"))
        if status and status != "all":
            stmt = stmt.where(Period.status == status)
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def get(self, period_id: str) -> Period:
        period = await self._db.get(Period, period_id)
        if period is None:
            raise NotFound(f"Period {period_id} not found")
        return period

    async def create(self, data: PeriodIn) -> Period:
        period = Period(id=str(uuid.uuid4()), **data.model_dump())
        self._db.add(period)
        await self._db.commit()
        await self._db.refresh(period)
        logger.info("Created period %s (%s)", period.id, period.name)
        return period

    async def update(self, period_id: str, data: PeriodIn) -> Period:
        period = await self.get(period_id)
        for field, value in data.model_dump().items():
            setattr(period, field, value)
        await self._db.commit()
        await self._db.refresh(period)
        return period

    async def delete(self, period_id: str) -> None:
        await self.get(period_id)
        await self.delete_many([period_id])

    async def delete_many(self, period_ids: list[str]) -> int:
        """Delete periods and detach their management records. Returns rows deleted."""
        await self._db.execute(
            update(Management)
            .where(Management.period_id.in_(period_ids))
            .values(period_id=None)
        )
        result = await self._db.execute(delete(Period).where(Period.id.in_(period_ids)))
        await self._db.commit()
        deleted = result.rowcount or 0
        logger.info("Deleted %d period(s)", deleted)
        return deleted
