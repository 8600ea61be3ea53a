"""Rule-based threat classification for new detections.

Rules are scanned in storage order (rule_id ascending) and the first
enabled rule whose comparison holds decides the threat level.  With the
rules seeded from config/defaults.yaml:

    SPEED_KTS   >  1000  → Critical
    SPEED_KTS   >  500   → High
    ALTITUDE_FT <  500   → Moderate
    SPEED_KTS   <  150   → Low

a 1200 kt contact at 300 ft is Critical: the altitude rule is never
reached.  Swapping the first two rows would make the same contact High.

A rule naming a field that was not submitted is skipped.  When nothing
matches the detection is classified ``Unknown`` with no rule id.

The classifier is pure; persisting the result is the caller's job
(see ``classify_detection`` for the database-backed wrapper).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from sqlalchemy.orm import Session

from app.models.base import RuleOperatorEnum, ThreatLevelEnum, enum_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    threat_level: ThreatLevelEnum
    rule_id: Optional[int] = None


UNCLASSIFIED = Classification(ThreatLevelEnum.UNKNOWN, None)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _compare(field_value: Any, operator: str, threshold: Any) -> bool:
    """Evaluate ``field_value <operator> threshold``.

    Numeric when both sides parse as numbers, string comparison otherwise.
    An unrecognised operator never matches.
    """
    left, right = _as_number(field_value), _as_number(threshold)
    if left is None or right is None:
        left, right = str(field_value), str(threshold)

    if operator == RuleOperatorEnum.LESS_THAN.value:
        return left < right
    if operator == RuleOperatorEnum.GREATER_THAN.value:
        return left > right
    if operator == RuleOperatorEnum.EQUALS.value:
        return left == right
    return False


def classify(fields: Mapping[str, Any], rules: Iterable[Any]) -> Classification:
    """Return the level assigned by the first matching enabled rule.

    ``rules`` may be ORM rows or any objects exposing rule_id,
    parameter_name, operator, value, assigned_threat_level and
    (optionally) is_enabled.
    """
    lowered = {str(k).lower(): v for k, v in fields.items()}

    for rule in rules:
        if not getattr(rule, "is_enabled", True):
            continue
        key = (rule.parameter_name or "").lower()
        if key not in lowered or lowered[key] is None:
            continue
        if _compare(lowered[key], enum_value(rule.operator), rule.value):
            return Classification(
                ThreatLevelEnum(enum_value(rule.assigned_threat_level)),
                rule.rule_id,
            )

    return UNCLASSIFIED


def load_enabled_rules(db: Session) -> list:
    """Enabled rules in evaluation order."""
    from app.models.classification_rule import ClassificationRule

    return (
        db.query(ClassificationRule)
        .filter(ClassificationRule.is_enabled == True)  # noqa: E712
        .order_by(ClassificationRule.rule_id)
        .all()
    )


def classify_detection(db: Session, fields: Mapping[str, Any]) -> Classification:
    """Classify a submitted detection against the stored rule table."""
    result = classify(fields, load_enabled_rules(db))
    logger.debug(
        "Classified %s as %s (rule %s)",
        fields.get("aircraft_identifier"), result.threat_level.value, result.rule_id,
    )
    return result
