"""Seed radar stations, classification rules and initial missile stock.

Reads config/defaults.yaml (see settings.DEFAULTS_CONFIG).  Rules are
inserted in file order, which becomes their evaluation order.  Missiles
go through the normal inventory path, so the MAX_MISSILES cap applies.

Usage:
    from app.database import SessionLocal
    from scripts.seed_defaults import seed_defaults
    db = SessionLocal()
    seed_defaults(db)
    db.commit()
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from sqlalchemy.orm import Session

from app.config import settings

logger = logging.getLogger(__name__)


def resolve_defaults_path(config_path: Optional[str] = None) -> Path:
    """Find the defaults file relative to cwd, then one level up (repo root)."""
    candidate = Path(config_path or settings.DEFAULTS_CONFIG)
    if candidate.exists() or candidate.is_absolute():
        return candidate
    parent = Path("..") / candidate
    if parent.exists():
        return parent
    return Path(__file__).resolve().parents[2] / candidate


def load_defaults(config_path: Optional[str] = None) -> dict:
    path = resolve_defaults_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Defaults config not found: {path}")
    with open(path) as f:
        return yaml.safe_load(f) or {}


def seed_defaults(db: Session, config: Optional[dict] = None) -> dict:
    """Insert seed rows that are not present yet.  Flushes; caller commits.

    Returns counts of inserted rows per table.
    """
    from app.models.base import RadarStatusEnum, RuleOperatorEnum, ThreatLevelEnum
    from app.models.classification_rule import ClassificationRule
    from app.models.missile import Missile
    from app.models.radar_station import RadarStation
    from app.modules.missile_inventory import InventoryFullError, add_missile

    config = load_defaults() if config is None else config
    inserted = {"radar_stations": 0, "classification_rules": 0, "missiles": 0}

    for station in config.get("radar_stations", []):
        exists = db.query(RadarStation).filter(
            RadarStation.station_name == station["station_name"]
        ).first()
        if exists:
            continue
        db.add(RadarStation(
            station_name=station["station_name"],
            latitude=float(station["latitude"]),
            longitude=float(station["longitude"]),
            operational_status=RadarStatusEnum(station.get("operational_status", "Operational")),
        ))
        inserted["radar_stations"] += 1

    if db.query(ClassificationRule).count() == 0:
        for rule in config.get("classification_rules", []):
            db.add(ClassificationRule(
                parameter_name=rule["parameter_name"],
                operator=RuleOperatorEnum(rule["operator"]),
                value=str(rule["value"]),
                assigned_threat_level=ThreatLevelEnum(rule["assigned_threat_level"]),
                is_enabled=bool(rule.get("is_enabled", True)),
                description=rule.get("description"),
            ))
            # flush per rule so rule_id follows file order
            db.flush()
            inserted["classification_rules"] += 1

    if db.query(Missile).count() == 0:
        try:
            for entry in config.get("missiles", []):
                for _ in range(int(entry.get("count", 1))):
                    add_missile(db, entry["missile_type"])
                    inserted["missiles"] += 1
        except InventoryFullError as e:
            logger.warning("Missile seeding stopped early: %s", e)

    db.flush()
    logger.info("Seeded defaults: %s", inserted)
    return inserted
