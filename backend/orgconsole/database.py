"""Async SQLite store for management and period records."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from orgconsole.config import settings
from orgconsole.models.base import Base

logger = logging.getLogger(__name__)


def _enable_foreign_keys(dbapi_conn, _connection_record):
    # management.period_id is ON DELETE SET NULL
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


db_path = Path(settings.database_path)
db_path.parent.mkdir(parents=True, exist_ok=True)

engine = create_async_engine(
    f"sqlite+aiosqlite:///{db_path}",
    echo=settings.log_level == "DEBUG",
)
event.listen(engine.sync_engine, "connect", _enable_foreign_keys)

async_session = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def init_db() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Record store ready at %s", db_path)
