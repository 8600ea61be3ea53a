"""Detection intake: store a radar observation and its initial classification."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from app.models.base import ThreatSourceEnum
from app.models.classified_threat import ClassifiedThreat
from app.models.detected_aircraft import DetectedAircraft
from app.models.radar_station import RadarStation
from app.modules.threat_classifier import classify_detection

logger = logging.getLogger(__name__)

DETECTION_FIELDS = (
    "aircraft_identifier", "latitude", "longitude",
    "altitude_ft", "speed_kts", "heading_deg", "radar_id",
)


class UnknownRadarError(LookupError):
    """Detection references a radar station that does not exist."""


def record_detection(db: Session, fields: Mapping[str, Any]) -> tuple[DetectedAircraft, ClassifiedThreat]:
    """Insert the detection and its auto-classified threat.

    Flushes but does not commit: the caller owns the transaction so the
    detection and its classification land (or roll back) together.
    """
    radar_id = fields["radar_id"]
    if db.query(RadarStation).filter(RadarStation.radar_id == radar_id).first() is None:
        raise UnknownRadarError(f"Radar station {radar_id} not found")

    detection = DetectedAircraft(**{k: fields[k] for k in DETECTION_FIELDS})
    db.add(detection)
    db.flush()

    result = classify_detection(db, fields)
    threat = ClassifiedThreat(
        detection_id=detection.detection_id,
        threat_level=result.threat_level,
        source=ThreatSourceEnum.AUTO_CLASSIFIED,
        rule_id=result.rule_id,
    )
    db.add(threat)
    db.flush()

    logger.info(
        "Detection %d (%s) via radar %d classified %s",
        detection.detection_id, detection.aircraft_identifier, radar_id, result.threat_level.value,
    )
    return detection, threat
