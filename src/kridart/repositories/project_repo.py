"""Project store: owner-scoped persistence of project documents."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from kridart.core.errors import ValidationError
from kridart.models.project import Project

__all__ = ["ProjectRepository"]


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, (dict, list)) and not value


class ProjectRepository:
    """Persist projects and read them back filtered by owner.

    The repository performs no authentication; callers pass the owner taken
    from a verified token.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, owner: str, name: Any, data: Any) -> Project:
        """Validate, insert and commit a project for ``owner``.

        Args:
            owner: Verified subject of the caller.
            name: Non-empty project name.
            data: Any non-empty JSON value; stored unchanged.

        Returns:
            The persisted project including its id, owner and timestamp.

        Raises:
            ValidationError: If ``name`` or ``data`` is missing or empty.
        """
        if not isinstance(name, str) or _is_blank(name):
            raise ValidationError("Project name is required")
        if _is_blank(data):
            raise ValidationError("Project data is required")

        project = Project(owner=owner, name=name, data=data)
        self.session.add(project)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(project)
        return project

    def list_by_owner(self, owner: str) -> list[Project]:
        """Return every project owned by ``owner`` in creation order."""
        stmt = (
            select(Project)
            .where(Project.owner == owner)
            .order_by(Project.created_at, Project.id)
        )
        return list(self.session.scalars(stmt))
