"""Shared declarative base and enums for all models."""
from __future__ import annotations

import enum
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class ThreatLevelEnum(str, enum.Enum):
    UNKNOWN = "Unknown"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"
    CRITICAL = "Critical"


# Levels that make a threat eligible for an automated alert.
ALERTABLE_THREAT_LEVELS = (ThreatLevelEnum.HIGH.value, ThreatLevelEnum.CRITICAL.value)


class ThreatSourceEnum(str, enum.Enum):
    AUTO_CLASSIFIED = "Auto-classified"
    OPERATOR_OVERRIDE = "Operator Override"


class MissileStatusEnum(str, enum.Enum):
    AVAILABLE = "Available"
    USED = "Used"
    # Available -> Used only; nothing in the service reverses it.


class RadarStatusEnum(str, enum.Enum):
    OPERATIONAL = "Operational"
    MAINTENANCE = "Maintenance"
    OFFLINE = "Offline"


class RuleOperatorEnum(str, enum.Enum):
    LESS_THAN = "<"
    GREATER_THAN = ">"
    EQUALS = "="


class OperatorRoleEnum(str, enum.Enum):
    ADMIN = "Admin"
    OPERATOR = "Operator"


# Default for interception_result on a freshly written incident report.
INCIDENT_RESULT_PENDING = "Pending"


def enum_type(enum_cls: type[enum.Enum]) -> SAEnum:
    """Column type persisting enum *values* ("High"), not member names ("HIGH")."""
    return SAEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
    )


def enum_value(value):
    """Plain value of an enum member; anything else is returned unchanged."""
    return value.value if isinstance(value, enum.Enum) else value
