"""Per-station surveillance aggregates."""
from __future__ import annotations

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.models.base import ALERTABLE_THREAT_LEVELS, enum_value
from app.models.classified_threat import ClassifiedThreat
from app.models.detected_aircraft import DetectedAircraft
from app.models.radar_station import RadarStation


def surveillance_summary(db: Session) -> list[dict]:
    """One row per radar station, stations without detections included.

    max/min altitude are None ("not available") for a station with no
    detections; average speed falls back to 0.
    """
    high_threat = case(
        (ClassifiedThreat.threat_level.in_(ALERTABLE_THREAT_LEVELS), ClassifiedThreat.threat_id),
        else_=None,
    )
    rows = (
        db.query(
            RadarStation.station_name,
            RadarStation.operational_status,
            func.count(func.distinct(DetectedAircraft.detection_id)),
            func.count(high_threat),
            func.max(DetectedAircraft.altitude_ft),
            func.min(DetectedAircraft.altitude_ft),
            func.coalesce(func.avg(DetectedAircraft.speed_kts), 0),
        )
        .outerjoin(DetectedAircraft, DetectedAircraft.radar_id == RadarStation.radar_id)
        .outerjoin(ClassifiedThreat, ClassifiedThreat.detection_id == DetectedAircraft.detection_id)
        .group_by(RadarStation.radar_id, RadarStation.station_name, RadarStation.operational_status)
        .order_by(RadarStation.station_name)
        .all()
    )
    return [
        {
            "station_name": name,
            "operational_status": enum_value(status),
            "detected_aircraft_count": detected or 0,
            "high_threat_count": high or 0,
            "max_altitude_ft": max_alt,
            "min_altitude_ft": min_alt,
            "avg_speed_kts": float(avg_speed) if avg_speed is not None else 0.0,
        }
        for name, status, detected, high, max_alt, min_alt, avg_speed in rows
    ]
