"""Operator entity — console accounts that log in and act on threats."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, OperatorRoleEnum, enum_type


class Operator(Base):
    __tablename__ = "operator_login_access"

    operator_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    # bcrypt hash, never the plain password
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(
        enum_type(OperatorRoleEnum), nullable=False, default=OperatorRoleEnum.OPERATOR
    )
    last_login_time: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
