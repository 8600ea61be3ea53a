"""Missile inventory: availability listing and capped additions."""
from __future__ import annotations

import logging
import random
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.models.base import MissileStatusEnum
from app.models.missile import Missile

logger = logging.getLogger(__name__)


class InventoryFullError(Exception):
    """Inventory already holds the configured maximum number of missiles."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Cannot add more missiles. Maximum limit of {limit} reached.")


def list_available_missiles(db: Session) -> list[Missile]:
    return (
        db.query(Missile)
        .filter(Missile.status == MissileStatusEnum.AVAILABLE)
        .order_by(Missile.missile_id)
        .all()
    )


def generate_serial_number(missile_type: str, rng: Optional[random.Random] = None) -> str:
    """'Patriot' → 'PAT-417'."""
    rng = rng or random
    return f"{missile_type[:3].upper()}-{rng.randint(100, 999)}"


def add_missile(db: Session, missile_type: str, max_missiles: Optional[int] = None) -> Missile:
    """Insert a new Available missile unless the inventory is full.

    The cap counts every row, used or not.  Flushes; the caller commits.
    """
    limit = settings.MAX_MISSILES if max_missiles is None else max_missiles
    total = db.query(Missile).count()
    if total >= limit:
        logger.warning("Missile add refused: inventory at %d/%d", total, limit)
        raise InventoryFullError(limit)

    missile = Missile(
        missile_type=missile_type,
        serial_number=generate_serial_number(missile_type),
        status=MissileStatusEnum.AVAILABLE,
        last_maintenance_date=date.today(),
    )
    db.add(missile)
    db.flush()
    logger.info("Missile %s (%s) added to inventory", missile.serial_number, missile_type)
    return missile
