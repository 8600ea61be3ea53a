"""Pydantic schemas for aircraft detections and threat overrides."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DetectionCreateRequest(BaseModel):
    aircraft_identifier: str = Field(..., min_length=1, max_length=50)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    altitude_ft: float
    speed_kts: float = Field(..., ge=0.0)
    heading_deg: float = Field(..., ge=0.0, le=360.0)
    radar_id: int = Field(..., gt=0)


class DetectionRead(BaseModel):
    detection_id: int
    aircraft_identifier: str
    detection_time: Optional[datetime] = None
    latitude: float
    longitude: float
    altitude_ft: float
    speed_kts: float
    heading_deg: float
    radar_station_name: str
    threat_id: int
    threat_level: str
    classification_time: Optional[datetime] = None
    source: str


class ThreatOverrideRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_threat_level: str = Field(..., alias="newThreatLevel", min_length=1)
    operator_id: int = Field(..., alias="operatorId", gt=0)
