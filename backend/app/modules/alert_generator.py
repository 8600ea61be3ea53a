"""Automated alerts for high/critical threats nobody has acted on.

A threat qualifies when its level is High or Critical, no interception-log
row references it and no automated alert references it yet.  Each call
raises at most one alert; the lowest qualifying threat_id goes first so
repeated calls walk the backlog deterministically.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import exists
from sqlalchemy.orm import Session

from app.models.automated_alert import AutomatedAlert
from app.models.base import ALERTABLE_THREAT_LEVELS, enum_value
from app.models.classified_threat import ClassifiedThreat
from app.models.detected_aircraft import DetectedAircraft
from app.models.interception_log import InterceptionLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertResult:
    alert_id: int
    threat_id: int
    aircraft_identifier: str
    threat_level: str
    reason: str


def find_unintercepted_threat(db: Session):
    """(threat_id, aircraft_identifier, threat_level) of the next threat to alert on, or None."""
    intercepted = exists().where(InterceptionLog.threat_id == ClassifiedThreat.threat_id)
    alerted = exists().where(AutomatedAlert.threat_id == ClassifiedThreat.threat_id)
    return (
        db.query(
            ClassifiedThreat.threat_id,
            DetectedAircraft.aircraft_identifier,
            ClassifiedThreat.threat_level,
        )
        .join(DetectedAircraft, ClassifiedThreat.detection_id == DetectedAircraft.detection_id)
        .filter(
            ClassifiedThreat.threat_level.in_(ALERTABLE_THREAT_LEVELS),
            ~intercepted,
            ~alerted,
        )
        .order_by(ClassifiedThreat.threat_id)
        .first()
    )


def generate_unintercepted_threat_alert(db: Session) -> Optional[AlertResult]:
    """Insert one unacknowledged alert, or return None when nothing qualifies.

    Flushes but does not commit.  The unique constraint on
    automated_alerts.threat_id turns a lost race into an IntegrityError
    instead of a duplicate alert.
    """
    row = find_unintercepted_threat(db)
    if row is None:
        logger.info("No unintercepted high/critical threats need an alert")
        return None

    threat_id, aircraft, level = row
    level = enum_value(level)
    reason = f"Unintercepted {level} threat detected: {aircraft}."

    alert = AutomatedAlert(threat_id=threat_id, reason=reason, is_acknowledged=False)
    db.add(alert)
    db.flush()

    logger.info("Alert %d raised for threat %d (%s)", alert.alert_id, threat_id, aircraft)
    return AlertResult(
        alert_id=alert.alert_id,
        threat_id=threat_id,
        aircraft_identifier=aircraft,
        threat_level=level,
        reason=reason,
    )


def acknowledge_alert(db: Session, alert_id: int, operator_id: int) -> bool:
    """Flip is_acknowledged false → true.  False when missing or already acknowledged."""
    updated = (
        db.query(AutomatedAlert)
        .filter(AutomatedAlert.alert_id == alert_id, AutomatedAlert.is_acknowledged == False)  # noqa: E712
        .update(
            {"is_acknowledged": True, "acknowledged_by_operator_id": operator_id},
            synchronize_session=False,
        )
    )
    return updated == 1
