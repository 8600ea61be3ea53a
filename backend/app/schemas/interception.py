"""Pydantic schemas for interceptions and incident reports."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InterceptionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    threat_id: int = Field(..., alias="threatId", gt=0)
    missile_id: int = Field(..., alias="missileId", gt=0)
    operator_id: int = Field(..., alias="operatorId", gt=0)
    interception_notes: Optional[str] = Field(None, alias="interceptionNotes", max_length=2000)


class IncidentReportRead(BaseModel):
    report_id: int
    log_id: int
    incident_time: Optional[datetime] = None
    aircraft_identifier: str
    threat_level_at_incident: str
    missile_type_used: str
    launching_operator_username: str
    interception_result: str
    report_summary: str
    interception_details: Optional[str] = None
