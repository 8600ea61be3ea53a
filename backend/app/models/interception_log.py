"""InterceptionLog entity — one row per successful interception attempt."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base


class InterceptionLog(Base):
    __tablename__ = "interception_log"

    log_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    threat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("classified_threats.threat_id"), nullable=False, index=True
    )
    missile_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("missile_inventory.missile_id"), nullable=False
    )
    operator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("operator_login_access.operator_id"), nullable=False
    )
    result_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    interception_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
