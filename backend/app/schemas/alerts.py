"""Pydantic schemas for automated alert operations."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AlertAcknowledgeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    operator_id: int = Field(..., alias="operatorId", gt=0)


class AutomatedAlertRead(BaseModel):
    alert_id: int
    threat_id: int
    alert_time: Optional[datetime] = None
    reason: str
    is_acknowledged: bool
    aircraft_identifier: str
    threat_level: str
