"""SQLAlchemy model for registered accounts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kridart.db.session import Base
from kridart.db.time import utcnow


def new_id() -> str:
    """Return a fresh opaque identifier (32 hex characters)."""
    return uuid.uuid4().hex


class User(Base):
    """Account identity with its salted password hash."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    username: Mapped[str] = mapped_column(String(150), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
