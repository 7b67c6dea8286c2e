"""Management record — organizational personnel with an optional Drive photo."""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, String, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from orgconsole.models.base import Base


class Management(Base):
    __tablename__ = "management"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    position: Mapped[str] = mapped_column(String(100), nullable=False)
    division: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    photo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # Drive URL
    period_id: Mapped[Optional[str]] = mapped_column(
        String, ForeignKey("periods.id", ondelete="SET NULL"), nullable=True, index=True
    )
    order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime, onupdate=func.now(), nullable=True
    )

    def __repr__(self) -> str:
        return f"<Management(id={self.id}, name='{self.name}', position='{self.position}')>"
