"""DetectedAircraft entity — one radar observation of an aircraft."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer, String, Float, DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base


class DetectedAircraft(Base):
    __tablename__ = "detected_aircraft"

    detection_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    aircraft_identifier: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    altitude_ft: Mapped[float] = mapped_column(Float, nullable=False)
    speed_kts: Mapped[float] = mapped_column(Float, nullable=False)
    heading_deg: Mapped[float] = mapped_column(Float, nullable=False)
    detection_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=func.now())
    radar_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("radar_stations.radar_id"), nullable=False, index=True
    )

    radar_station: Mapped["RadarStation"] = relationship("RadarStation", back_populates="detections")
    threat: Mapped["ClassifiedThreat"] = relationship(
        "ClassifiedThreat", back_populates="detection", uselist=False
    )
