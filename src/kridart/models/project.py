"""SQLAlchemy model for per-user project documents."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kridart.db.session import Base
from kridart.db.time import utcnow
from kridart.models.user import new_id


class Project(Base):
    """Project document owned by exactly one user.

    ``data`` is stored as-is; its shape belongs to the client.
    """

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[Any] = mapped_column(JSON, nullable=False)
    # Subject of the verified token that created the project; never client input.
    owner: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
