"""Missile entity — interceptor inventory."""
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Integer, String, Date
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, MissileStatusEnum, enum_type


class Missile(Base):
    __tablename__ = "missile_inventory"

    missile_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    missile_type: Mapped[str] = mapped_column(String(50), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(
        enum_type(MissileStatusEnum), nullable=False, default=MissileStatusEnum.AVAILABLE, index=True
    )
    last_maintenance_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
