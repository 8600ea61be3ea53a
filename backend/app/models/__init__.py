"""Import all models to register them with SQLAlchemy metadata."""
from app.models.base import Base
from app.models.radar_station import RadarStation
from app.models.operator import Operator
from app.models.detected_aircraft import DetectedAircraft
from app.models.classification_rule import ClassificationRule
from app.models.classified_threat import ClassifiedThreat
from app.models.missile import Missile
from app.models.interception_log import InterceptionLog
from app.models.incident_report import IncidentReport
from app.models.automated_alert import AutomatedAlert
from app.models.audit_log import AuditLog

__all__ = [
    "Base",
    "RadarStation",
    "Operator",
    "DetectedAircraft",
    "ClassificationRule",
    "ClassifiedThreat",
    "Missile",
    "InterceptionLog",
    "IncidentReport",
    "AutomatedAlert",
    "AuditLog",
]
