"""RadarStation entity — fixed sensor sites that report detections."""
from __future__ import annotations

from sqlalchemy import Integer, String, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.models.base import Base, RadarStatusEnum, enum_type


class RadarStation(Base):
    __tablename__ = "radar_stations"

    radar_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    operational_status: Mapped[str] = mapped_column(
        enum_type(RadarStatusEnum), nullable=False, default=RadarStatusEnum.OPERATIONAL
    )

    detections: Mapped[list["DetectedAircraft"]] = relationship(
        "DetectedAircraft", back_populates="radar_station"
    )
