from __future__ import annotations

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.base import enum_value
from app.config import settings
from app.schemas.alerts import AlertAcknowledgeRequest, AutomatedAlertRead
from app.schemas.auth import LoginRequest
from app.schemas.detection import DetectionCreateRequest, DetectionRead, ThreatOverrideRequest
from app.schemas.interception import IncidentReportRead, InterceptionRequest
from app.schemas.missiles import MissileAddRequest, MissileRead
from app.schemas.stations import ClassificationRuleRead, RadarStationRead, SurveillanceSummaryRow

logger = logging.getLogger(__name__)

router = APIRouter()


def _audit_log(db: Session, action: str, entity_type: str, entity_id: int = None,
               details: dict = None, request: Request = None) -> None:
    """Record an operator action in the same transaction as the action itself."""
    from app.models.audit_log import AuditLog
    log = AuditLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        user_agent=request.headers.get("user-agent") if request else None,
        ip_address=request.client.host if request and request.client else None,
    )
    db.add(log)


# ---------------------------------------------------------------------------
# Radar stations
# ---------------------------------------------------------------------------

@router.get("/radars", tags=["stations"], response_model=list[RadarStationRead])
def list_radars(db: Session = Depends(get_db)):
    from app.models.radar_station import RadarStation

    stations = db.query(RadarStation).order_by(RadarStation.radar_id).all()
    return [
        {
            "radar_id": s.radar_id,
            "station_name": s.station_name,
            "latitude": s.latitude,
            "longitude": s.longitude,
            "operational_status": enum_value(s.operational_status),
        }
        for s in stations
    ]


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

@router.post("/login", tags=["auth"])
def login(body: LoginRequest, request: Request, db: Session = Depends(get_db)):
    """Verify operator credentials; stamps last_login_time on success."""
    from app.modules.auth import authenticate

    operator = authenticate(db, body.username, body.password)
    if operator is None:
        raise HTTPException(status_code=401, detail="Invalid username or password.")

    _audit_log(db, "login", "operator", operator.operator_id, request=request)
    db.commit()
    return {
        "message": "Login successful",
        "operator": {
            "id": operator.operator_id,
            "username": operator.username,
            "role": enum_value(operator.role),
        },
    }


# ---------------------------------------------------------------------------
# Detections & threats
# ---------------------------------------------------------------------------

@router.post("/aircraft/detect", tags=["aircraft"], status_code=201)
def detect_aircraft(body: DetectionCreateRequest, request: Request, db: Session = Depends(get_db)):
    """Store a detection and auto-classify it against the enabled rule table."""
    from app.modules.detection import UnknownRadarError, record_detection

    try:
        detection, threat = record_detection(db, body.model_dump())
        _audit_log(db, "detect", "detection", detection.detection_id, {
            "aircraft_identifier": detection.aircraft_identifier,
            "threat_level": enum_value(threat.threat_level),
            "rule_id": threat.rule_id,
        }, request)
        db.commit()
    except UnknownRadarError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        db.rollback()
        raise

    return {
        "message": "Aircraft detected and classified successfully",
        "detection_id": detection.detection_id,
        "aircraft_identifier": detection.aircraft_identifier,
        "initial_threat_level": enum_value(threat.threat_level),
    }


@router.get("/aircraft/all", tags=["aircraft"], response_model=list[DetectionRead])
def list_detected_aircraft(db: Session = Depends(get_db)):
    """All detections joined with their radar station and current threat, newest first."""
    from app.models.classified_threat import ClassifiedThreat
    from app.models.detected_aircraft import DetectedAircraft
    from app.models.radar_station import RadarStation

    rows = (
        db.query(DetectedAircraft, RadarStation.station_name, ClassifiedThreat)
        .join(RadarStation, DetectedAircraft.radar_id == RadarStation.radar_id)
        .join(ClassifiedThreat, DetectedAircraft.detection_id == ClassifiedThreat.detection_id)
        .order_by(DetectedAircraft.detection_time.desc(), DetectedAircraft.detection_id.desc())
        .all()
    )
    return [
        {
            "detection_id": d.detection_id,
            "aircraft_identifier": d.aircraft_identifier,
            "detection_time": d.detection_time,
            "latitude": d.latitude,
            "longitude": d.longitude,
            "altitude_ft": d.altitude_ft,
            "speed_kts": d.speed_kts,
            "heading_deg": d.heading_deg,
            "radar_station_name": station_name,
            "threat_id": t.threat_id,
            "threat_level": enum_value(t.threat_level),
            "classification_time": t.classification_time,
            "source": enum_value(t.source),
        }
        for d, station_name, t in rows
    ]


@router.patch("/threats/{threat_id}/override", tags=["threats"])
def override_threat(
    body: ThreatOverrideRequest,
    request: Request,
    threat_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    """Operator sets a threat level directly (one of the five fixed levels)."""
    from app.modules.threat_override import VALID_THREAT_LEVELS, override_threat_level

    if body.new_threat_level not in VALID_THREAT_LEVELS:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid newThreatLevel. Must be one of: {VALID_THREAT_LEVELS}",
        )

    if not override_threat_level(db, threat_id, body.new_threat_level, body.operator_id):
        db.rollback()
        raise HTTPException(status_code=404, detail=f"Threat with ID {threat_id} not found.")

    _audit_log(db, "threat_override", "threat", threat_id, {
        "new_threat_level": body.new_threat_level, "operator_id": body.operator_id,
    }, request)
    db.commit()
    return {
        "message": f"Threat ID {threat_id} updated to {body.new_threat_level} by operator {body.operator_id}.",
        "threatId": threat_id,
        "newThreatLevel": body.new_threat_level,
    }


@router.get("/rules", tags=["threats"], response_model=list[ClassificationRuleRead])
def list_classification_rules(db: Session = Depends(get_db)):
    """Classification rules in evaluation order (enabled and disabled)."""
    from app.models.classification_rule import ClassificationRule

    rules = db.query(ClassificationRule).order_by(ClassificationRule.rule_id).all()
    return [
        {
            "rule_id": r.rule_id,
            "parameter_name": r.parameter_name,
            "operator": enum_value(r.operator),
            "value": r.value,
            "assigned_threat_level": enum_value(r.assigned_threat_level),
            "is_enabled": r.is_enabled,
            "description": r.description,
        }
        for r in rules
    ]


# ---------------------------------------------------------------------------
# Missiles & interceptions
# ---------------------------------------------------------------------------

def _missile_dict(m) -> dict:
    return {
        "missile_id": m.missile_id,
        "missile_type": m.missile_type,
        "serial_number": m.serial_number,
        "status": enum_value(m.status),
        "last_maintenance_date": m.last_maintenance_date,
    }


@router.get("/missiles/available", tags=["missiles"], response_model=list[MissileRead])
def list_available_missiles(db: Session = Depends(get_db)):
    from app.modules.missile_inventory import list_available_missiles as _list_available

    return [_missile_dict(m) for m in _list_available(db)]


@router.post("/missiles/add", tags=["missiles"], status_code=201)
def add_missile(body: MissileAddRequest, request: Request, db: Session = Depends(get_db)):
    """Add an Available missile; refused with 403 once the inventory cap is reached."""
    from app.modules.missile_inventory import InventoryFullError, add_missile as _add_missile

    try:
        missile = _add_missile(db, body.missile_type)
    except InventoryFullError as e:
        raise HTTPException(status_code=403, detail=str(e))

    _audit_log(db, "add_missile", "missile", missile.missile_id, {
        "missile_type": missile.missile_type, "serial_number": missile.serial_number,
    }, request)
    db.commit()
    return {
        "message": f"Missile '{missile.missile_type}' (SN: {missile.serial_number}) added successfully.",
        "missile": {
            "missile_id": missile.missile_id,
            "missile_type": missile.missile_type,
            "serial_number": missile.serial_number,
            "status": enum_value(missile.status),
        },
    }


@router.post("/interceptions", tags=["interceptions"], status_code=201)
def create_interception(body: InterceptionRequest, request: Request, db: Session = Depends(get_db)):
    """Consume a missile against a threat and write the incident report atomically."""
    from app.modules.interception import (
        IncidentDetailsNotFoundError,
        MissileUnavailableError,
        execute_interception,
    )

    try:
        result = execute_interception(
            db, body.threat_id, body.missile_id, body.operator_id, body.interception_notes,
        )
        _audit_log(db, "interception", "threat", body.threat_id, {
            "missile_id": body.missile_id,
            "operator_id": body.operator_id,
            "log_id": result.log_id,
        }, request)
        db.commit()
    except MissileUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except IncidentDetailsNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        db.rollback()
        raise

    return {
        "message": "Interception initiated and incident report created successfully.",
        "logId": result.log_id,
        "threatId": result.threat_id,
        "missileId": result.missile_id,
    }


@router.get("/incidents/all", tags=["interceptions"], response_model=list[IncidentReportRead])
def list_incident_reports(db: Session = Depends(get_db)):
    """Incident reports joined with their interception-log notes, newest first."""
    from app.models.incident_report import IncidentReport
    from app.models.interception_log import InterceptionLog

    rows = (
        db.query(IncidentReport, InterceptionLog.result_details)
        .join(InterceptionLog, IncidentReport.log_id == InterceptionLog.log_id)
        .order_by(IncidentReport.incident_time.desc(), IncidentReport.report_id.desc())
        .all()
    )
    return [
        {
            "report_id": r.report_id,
            "log_id": r.log_id,
            "incident_time": r.incident_time,
            "aircraft_identifier": r.aircraft_identifier,
            "threat_level_at_incident": r.threat_level_at_incident,
            "missile_type_used": r.missile_type_used,
            "launching_operator_username": r.launching_operator_username,
            "interception_result": r.interception_result,
            "report_summary": r.report_summary,
            "interception_details": details,
        }
        for r, details in rows
    ]


# ---------------------------------------------------------------------------
# Automated alerts
# ---------------------------------------------------------------------------

@router.get("/alerts/automated", tags=["alerts"], response_model=list[AutomatedAlertRead])
def list_automated_alerts(db: Session = Depends(get_db)):
    """Alerts joined with threat level and aircraft identifier, newest first."""
    from app.models.automated_alert import AutomatedAlert
    from app.models.classified_threat import ClassifiedThreat
    from app.models.detected_aircraft import DetectedAircraft

    rows = (
        db.query(AutomatedAlert, DetectedAircraft.aircraft_identifier, ClassifiedThreat.threat_level)
        .join(ClassifiedThreat, AutomatedAlert.threat_id == ClassifiedThreat.threat_id)
        .join(DetectedAircraft, ClassifiedThreat.detection_id == DetectedAircraft.detection_id)
        .order_by(AutomatedAlert.alert_time.desc(), AutomatedAlert.alert_id.desc())
        .all()
    )
    return [
        {
            "alert_id": a.alert_id,
            "threat_id": a.threat_id,
            "alert_time": a.alert_time,
            "reason": a.reason,
            "is_acknowledged": bool(a.is_acknowledged),
            "aircraft_identifier": aircraft,
            "threat_level": enum_value(level),
        }
        for a, aircraft, level in rows
    ]


@router.post("/alerts/generate-unintercepted-threat-alert", tags=["alerts"], status_code=201)
def generate_unintercepted_threat_alert(request: Request, db: Session = Depends(get_db)):
    """Raise one alert for a high/critical threat with no interception and no alert yet."""
    from app.modules.alert_generator import generate_unintercepted_threat_alert as _generate

    result = _generate(db)
    if result is None:
        raise HTTPException(
            status_code=404,
            detail="No unintercepted high/critical threats found to generate an alert for.",
        )

    _audit_log(db, "generate_alert", "alert", result.alert_id, {"threat_id": result.threat_id}, request)
    db.commit()
    return {
        "message": f"Alert generated for threat {result.threat_id} ({result.aircraft_identifier}).",
        "alertId": result.alert_id,
        "threatId": result.threat_id,
        "aircraftIdentifier": result.aircraft_identifier,
    }


@router.patch("/alerts/{alert_id}/acknowledge", tags=["alerts"])
def acknowledge_alert(
    body: AlertAcknowledgeRequest,
    request: Request,
    alert_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    from app.modules.alert_generator import acknowledge_alert as _acknowledge

    if not _acknowledge(db, alert_id, body.operator_id):
        db.rollback()
        raise HTTPException(
            status_code=404, detail=f"Alert with ID {alert_id} not found or already acknowledged."
        )

    _audit_log(db, "acknowledge_alert", "alert", alert_id, {"operator_id": body.operator_id}, request)
    db.commit()
    return {
        "message": f"Alert ID {alert_id} acknowledged by operator {body.operator_id}.",
        "alertId": alert_id,
        "is_acknowledged": 1,
    }


# ---------------------------------------------------------------------------
# Surveillance
# ---------------------------------------------------------------------------

@router.get("/surveillance/summary", tags=["surveillance"], response_model=list[SurveillanceSummaryRow])
def get_surveillance_summary(db: Session = Depends(get_db)):
    """Per-station detection counts, high-threat counts and altitude/speed aggregates."""
    from app.modules.surveillance_summary import surveillance_summary

    return surveillance_summary(db)


# ---------------------------------------------------------------------------
# System / Health
# ---------------------------------------------------------------------------

@router.get("/health", tags=["system"])
def health_check(db: Session = Depends(get_db)):
    """Health check with DB latency measurement."""
    from sqlalchemy import text

    t0 = time.time()
    try:
        db.execute(text("SELECT 1"))
        db_status = "ok"
    except Exception as e:
        logger.warning("Health check database probe failed: %s", e)
        db_status = f"error: {e}"
    latency_ms = round((time.time() - t0) * 1000, 1)

    return {
        "status": "ok",
        "version": settings.VERSION,
        "database": {"status": db_status, "latency_ms": latency_ms},
    }


# ---------------------------------------------------------------------------
# Audit Log
# ---------------------------------------------------------------------------

@router.get("/audit-log", tags=["admin"])
def list_audit_logs(
    action: Optional[str] = None,
    entity_type: Optional[str] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """List operator audit entries, newest first."""
    from app.models.audit_log import AuditLog
    q = db.query(AuditLog).order_by(AuditLog.created_at.desc())
    if action:
        q = q.filter(AuditLog.action == action)
    if entity_type:
        q = q.filter(AuditLog.entity_type == entity_type)
    total = q.count()
    logs = q.offset(skip).limit(limit).all()
    return {
        "total": total,
        "logs": [
            {
                "audit_id": l.audit_id,
                "action": l.action,
                "entity_type": l.entity_type,
                "entity_id": l.entity_id,
                "details": l.details,
                "created_at": l.created_at.isoformat() if l.created_at else None,
            }
            for l in logs
        ],
    }
