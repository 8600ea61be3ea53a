"""ClassifiedThreat entity — current classification attached 1:1 to a detection."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base, ThreatLevelEnum, ThreatSourceEnum, enum_type


class ClassifiedThreat(Base):
    __tablename__ = "classified_threats"

    threat_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    detection_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("detected_aircraft.detection_id"), unique=True, nullable=False
    )
    threat_level: Mapped[str] = mapped_column(
        enum_type(ThreatLevelEnum), nullable=False, default=ThreatLevelEnum.UNKNOWN, index=True
    )
    source: Mapped[str] = mapped_column(
        enum_type(ThreatSourceEnum), nullable=False, default=ThreatSourceEnum.AUTO_CLASSIFIED
    )
    rule_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("threat_classification_rules.rule_id"), nullable=True
    )
    classification_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    # Set only by an operator override
    operator_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("operator_login_access.operator_id"), nullable=True
    )

    detection: Mapped["DetectedAircraft"] = relationship("DetectedAircraft", back_populates="threat")
