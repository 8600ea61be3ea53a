"""ClassificationRule entity — one row of the threat rule table.

Rules are evaluated in rule_id order; the first enabled rule whose
comparison holds assigns the threat level (see modules/threat_classifier).
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy import Integer, String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, RuleOperatorEnum, ThreatLevelEnum, enum_type


class ClassificationRule(Base):
    __tablename__ = "threat_classification_rules"

    rule_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Detection field name, matched case-insensitively (e.g. "SPEED_KTS")
    parameter_name: Mapped[str] = mapped_column(String(50), nullable=False)
    operator: Mapped[str] = mapped_column(enum_type(RuleOperatorEnum), nullable=False)
    # Stored as text; compared numerically when both sides parse as numbers
    value: Mapped[str] = mapped_column(String(100), nullable=False)
    assigned_threat_level: Mapped[str] = mapped_column(enum_type(ThreatLevelEnum), nullable=False)
    is_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
