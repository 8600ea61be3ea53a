"""Interception workflow: consume one missile against one threat.

Steps, all inside the caller's session transaction:

  1. Build the interception-log row (threat, missile, operator, notes).
  2. Guarded consume: ``UPDATE missile_inventory SET status='Used'
     WHERE missile_id=:id AND status='Available'``.  The affected-row
     count is the only availability check; there is no read-then-write
     window for two concurrent launches to both see "Available".
  3. Snapshot aircraft identifier, threat level, missile type and
     operator username from a single join and write the incident report.

Zero rows from step 2 → MissileUnavailableError; no snapshot row from
step 3 → IncidentDetailsNotFoundError.  Either way the session is rolled
back before raising, so no log row, missile change or report survives.
On success the rows are flushed; the caller commits.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from app.models.base import INCIDENT_RESULT_PENDING, MissileStatusEnum, enum_value
from app.models.classified_threat import ClassifiedThreat
from app.models.detected_aircraft import DetectedAircraft
from app.models.incident_report import IncidentReport
from app.models.interception_log import InterceptionLog
from app.models.missile import Missile
from app.models.operator import Operator

logger = logging.getLogger(__name__)

DEFAULT_INTERCEPTION_NOTES = "Interception initiated"


class MissileUnavailableError(Exception):
    """Missile already used or does not exist."""


class IncidentDetailsNotFoundError(LookupError):
    """Threat, missile or operator could not be joined for the report."""


@dataclass(frozen=True)
class InterceptionResult:
    log_id: int
    report_id: int
    threat_id: int
    missile_id: int
    report_summary: str


def _consume_missile(db: Session, missile_id: int) -> bool:
    updated = (
        db.query(Missile)
        .filter(Missile.missile_id == missile_id, Missile.status == MissileStatusEnum.AVAILABLE)
        .update({"status": MissileStatusEnum.USED}, synchronize_session=False)
    )
    return updated == 1


def _load_incident_details(db: Session, threat_id: int, missile_id: int, operator_id: int):
    """(aircraft_identifier, threat_level, missile_type, username) or None."""
    return (
        db.query(
            DetectedAircraft.aircraft_identifier,
            ClassifiedThreat.threat_level,
            Missile.missile_type,
            Operator.username,
        )
        .join(ClassifiedThreat, ClassifiedThreat.detection_id == DetectedAircraft.detection_id)
        .join(Missile, Missile.missile_id == missile_id)
        .join(Operator, Operator.operator_id == operator_id)
        .filter(ClassifiedThreat.threat_id == threat_id)
        .first()
    )


def build_report_summary(aircraft: str, threat_level: str, missile_type: str, username: str) -> str:
    return (
        f"Interception initiated against {aircraft} (Threat: {threat_level}) "
        f"using {missile_type} by {username}."
    )


def execute_interception(
    db: Session,
    threat_id: int,
    missile_id: int,
    operator_id: int,
    notes: Optional[str] = None,
) -> InterceptionResult:
    log = InterceptionLog(
        threat_id=threat_id,
        missile_id=missile_id,
        operator_id=operator_id,
        result_details=notes or DEFAULT_INTERCEPTION_NOTES,
    )

    try:
        if not _consume_missile(db, missile_id):
            db.rollback()
            logger.warning(
                "Interception of threat %d refused: missile %d not available", threat_id, missile_id
            )
            raise MissileUnavailableError("Selected missile is not available or does not exist.")

        details = _load_incident_details(db, threat_id, missile_id, operator_id)
        if details is None:
            db.rollback()
            logger.warning(
                "Interception rolled back: no report details for threat=%d missile=%d operator=%d",
                threat_id, missile_id, operator_id,
            )
            raise IncidentDetailsNotFoundError(
                "Could not find all details for incident report generation."
            )

        aircraft, level, missile_type, username = details
        level = enum_value(level)
        summary = build_report_summary(aircraft, level, missile_type, username)

        db.add(log)
        db.flush()

        report = IncidentReport(
            log_id=log.log_id,
            aircraft_identifier=aircraft,
            threat_level_at_incident=level,
            missile_type_used=missile_type,
            launching_operator_username=username,
            interception_result=INCIDENT_RESULT_PENDING,
            report_summary=summary,
        )
        db.add(report)
        db.flush()
    except (MissileUnavailableError, IncidentDetailsNotFoundError):
        raise
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Interception log %d: missile %d launched at threat %d by operator %d",
        log.log_id, missile_id, threat_id, operator_id,
    )
    return InterceptionResult(
        log_id=log.log_id,
        report_id=report.report_id,
        threat_id=threat_id,
        missile_id=missile_id,
        report_summary=summary,
    )
