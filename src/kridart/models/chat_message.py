"""Models describing persisted chat messages."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from kridart.db.session import Base
from kridart.db.time import utcnow


class ChatMessage(Base):
    """Message sent on the shared chat channel.

    The autoincrement ``id`` is the persistence order used for replay.
    """

    __tablename__ = "chat_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Asserted by the client; not tied to an authenticated account.
    username: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
