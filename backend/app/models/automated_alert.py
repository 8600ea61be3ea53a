"""AutomatedAlert entity — system-raised notice for a neglected high/critical threat."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base


class AutomatedAlert(Base):
    __tablename__ = "automated_alerts"
    __table_args__ = (
        # Backs the generator's "no alert yet" predicate against concurrent callers.
        UniqueConstraint("threat_id", name="uq_automated_alert_threat"),
    )

    alert_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    threat_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("classified_threats.threat_id"), nullable=False
    )
    alert_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    is_acknowledged: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    acknowledged_by_operator_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("operator_login_access.operator_id"), nullable=True
    )
