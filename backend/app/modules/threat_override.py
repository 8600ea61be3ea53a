"""Operator override of a threat's classification."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.models.base import ThreatLevelEnum, ThreatSourceEnum
from app.models.classified_threat import ClassifiedThreat

logger = logging.getLogger(__name__)

VALID_THREAT_LEVELS = [e.value for e in ThreatLevelEnum]


def override_threat_level(db: Session, threat_id: int, new_level: str, operator_id: int) -> bool:
    """Set the level in place and stamp the override provenance.

    Raises ValueError for a level outside the fixed enum (before any write).
    Returns False when no threat has this id.  Concurrent overrides are
    last-write-wins.
    """
    if new_level not in VALID_THREAT_LEVELS:
        raise ValueError(f"Invalid threat level '{new_level}'. Must be one of: {VALID_THREAT_LEVELS}")

    updated = (
        db.query(ClassifiedThreat)
        .filter(ClassifiedThreat.threat_id == threat_id)
        .update(
            {
                "threat_level": ThreatLevelEnum(new_level),
                "source": ThreatSourceEnum.OPERATOR_OVERRIDE,
                "classification_time": datetime.utcnow(),
                "operator_id": operator_id,
            },
            synchronize_session=False,
        )
    )
    if updated == 1:
        logger.info("Threat %d overridden to %s by operator %d", threat_id, new_level, operator_id)
    return updated == 1
