"""Operator credential hashing and verification (bcrypt)."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from app.models.base import OperatorRoleEnum
from app.models.operator import Operator

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Operator record holds a malformed password hash")
        return False


def authenticate(db: Session, username: str, password: str) -> Optional[Operator]:
    """Return the operator on a correct password and stamp last_login_time.

    Unknown usernames and wrong passwords are indistinguishable to the caller.
    The login stamp is flushed, not committed.
    """
    operator = db.query(Operator).filter(Operator.username == username).first()
    if operator is None or not verify_password(password, operator.password_hash):
        logger.info("Failed login for username %r", username)
        return None
    operator.last_login_time = datetime.utcnow()
    db.flush()
    return operator


def create_operator(db: Session, username: str, password: str, role: str) -> Operator:
    operator = Operator(
        username=username,
        password_hash=hash_password(password),
        role=OperatorRoleEnum(role),
    )
    db.add(operator)
    db.flush()
    return operator
