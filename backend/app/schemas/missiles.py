"""Pydantic schemas for missile inventory."""
from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class MissileAddRequest(BaseModel):
    missile_type: str = Field(..., min_length=1, max_length=50)


class MissileRead(BaseModel):
    missile_id: int
    missile_type: str
    serial_number: str
    status: str
    last_maintenance_date: Optional[date] = None

    model_config = {"from_attributes": True}
