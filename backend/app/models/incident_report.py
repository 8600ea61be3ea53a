"""IncidentReport entity — snapshot written together with an interception log.

aircraft_identifier, threat_level_at_incident, missile_type_used and
launching_operator_username are copied at creation time and are not
updated when the source rows change afterwards.
"""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, ForeignKey, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, INCIDENT_RESULT_PENDING


class IncidentReport(Base):
    __tablename__ = "incident_reports"

    report_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    log_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("interception_log.log_id"), unique=True, nullable=False
    )
    incident_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    aircraft_identifier: Mapped[str] = mapped_column(String(50), nullable=False)
    threat_level_at_incident: Mapped[str] = mapped_column(String(20), nullable=False)
    missile_type_used: Mapped[str] = mapped_column(String(50), nullable=False)
    launching_operator_username: Mapped[str] = mapped_column(String(50), nullable=False)
    interception_result: Mapped[str] = mapped_column(
        String(50), nullable=False, default=INCIDENT_RESULT_PENDING
    )
    report_summary: Mapped[str] = mapped_column(Text, nullable=False)
