"""Pydantic schemas for radar stations and classification rules."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class RadarStationRead(BaseModel):
    radar_id: int
    station_name: str
    latitude: float
    longitude: float
    operational_status: str

    model_config = {"from_attributes": True}


class ClassificationRuleRead(BaseModel):
    rule_id: int
    parameter_name: str
    operator: str
    value: str
    assigned_threat_level: str
    is_enabled: bool
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class SurveillanceSummaryRow(BaseModel):
    station_name: str
    operational_status: str
    detected_aircraft_count: int
    high_threat_count: int
    max_altitude_ft: Optional[float] = None
    min_altitude_ft: Optional[float] = None
    avg_speed_kts: float
