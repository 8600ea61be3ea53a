"""Row builders for SQLite-backed tests.  Each flushes; callers commit."""
import bcrypt

from app.models.base import (
    MissileStatusEnum, OperatorRoleEnum, RadarStatusEnum, RuleOperatorEnum,
    ThreatLevelEnum, ThreatSourceEnum,
)
from app.models.classification_rule import ClassificationRule
from app.models.classified_threat import ClassifiedThreat
from app.models.detected_aircraft import DetectedAircraft
from app.models.missile import Missile
from app.models.operator import Operator
from app.models.radar_station import RadarStation


TEST_PASSWORD = "correct horse battery staple"


def make_station(db, name="North Ridge", status=RadarStatusEnum.OPERATIONAL):
    station = RadarStation(station_name=name, latitude=34.05, longitude=-118.24, operational_status=status)
    db.add(station)
    db.flush()
    return station


def make_operator(db, username="op1", role=OperatorRoleEnum.OPERATOR, password=TEST_PASSWORD):
    # Low work factor keeps the suite fast; verification is factor-agnostic.
    hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=4)).decode()
    operator = Operator(username=username, password_hash=hashed, role=role)
    db.add(operator)
    db.flush()
    return operator


def make_rule(db, parameter, operator, value, level, enabled=True):
    rule = ClassificationRule(
        parameter_name=parameter,
        operator=RuleOperatorEnum(operator),
        value=str(value),
        assigned_threat_level=ThreatLevelEnum(level),
        is_enabled=enabled,
    )
    db.add(rule)
    db.flush()
    return rule


def make_missile(db, missile_type="Patriot", serial="PAT-100", status=MissileStatusEnum.AVAILABLE):
    missile = Missile(missile_type=missile_type, serial_number=serial, status=status)
    db.add(missile)
    db.flush()
    return missile


def make_threat(db, station, identifier="BOGEY-1", level=ThreatLevelEnum.HIGH,
                altitude_ft=20000.0, speed_kts=600.0):
    detection = DetectedAircraft(
        aircraft_identifier=identifier,
        latitude=34.1, longitude=-118.3,
        altitude_ft=altitude_ft, speed_kts=speed_kts, heading_deg=90.0,
        radar_id=station.radar_id,
    )
    db.add(detection)
    db.flush()
    threat = ClassifiedThreat(
        detection_id=detection.detection_id,
        threat_level=level,
        source=ThreatSourceEnum.AUTO_CLASSIFIED,
    )
    db.add(threat)
    db.flush()
    return threat


