"""Message store backing the chat hub."""
from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kridart.core.errors import StoreError
from kridart.models.chat_message import ChatMessage
from kridart.schemas.chat import ChatMessageOut

__all__ = ["MessageRepository", "SqlMessageStore"]


class MessageRepository:
    """Append-only access to persisted chat messages."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, *, username: str, message: str) -> ChatMessage:
        """Insert a message and commit; the new row id fixes its order."""
        row = ChatMessage(username=username, message=message)
        self.session.add(row)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(row)
        return row

    def list_history(self, limit: int | None = None) -> list[ChatMessage]:
        """Return messages oldest first; with ``limit``, only the newest ``limit``."""
        if limit is None:
            return list(self.session.scalars(select(ChatMessage).order_by(ChatMessage.id)))
        newest = self.session.scalars(
            select(ChatMessage).order_by(ChatMessage.id.desc()).limit(limit)
        )
        return list(reversed(list(newest)))


class SqlMessageStore:
    """Session-per-call message store used by the long-lived chat hub.

    Methods are blocking; the hub runs them in the thread pool. Database
    failures surface as :class:`~kridart.core.errors.StoreError`.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        history_limit: int | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._history_limit = history_limit

    def append(self, username: str, message: str) -> ChatMessageOut:
        try:
            with self._session_factory() as session:
                row = MessageRepository(session).add(username=username, message=message)
                return ChatMessageOut.model_validate(row)
        except SQLAlchemyError as err:
            raise StoreError("Message could not be saved", detail=str(err)) from err

    def history(self) -> list[ChatMessageOut]:
        try:
            with self._session_factory() as session:
                rows = MessageRepository(session).list_history(self._history_limit)
                return [ChatMessageOut.model_validate(row) for row in rows]
        except SQLAlchemyError as err:
            raise StoreError("Message history unavailable", detail=str(err)) from err
