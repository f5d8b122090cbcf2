"""Credential store: account records looked up by username."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from kridart.models.user import User

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user accounts."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_username(self, username: str) -> User | None:
        """Return the account registered under ``username``, if any."""
        return self.session.scalars(select(User).where(User.username == username)).first()

    def create(self, *, username: str, password_hash: str) -> User:
        """Insert a new account and commit.

        Raises:
            sqlalchemy.exc.IntegrityError: If the username is already taken.
        """
        user = User(username=username, password_hash=password_hash)
        self.session.add(user)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user
