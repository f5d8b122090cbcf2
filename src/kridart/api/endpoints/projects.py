"""Owner-scoped project endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from sqlalchemy.exc import SQLAlchemyError

from kridart.api.dependencies import CurrentIdentityDep, SessionDep
from kridart.core.errors import StoreError
from kridart.repositories.project_repo import ProjectRepository
from kridart.schemas.project import ProjectCreate, ProjectCreated, ProjectOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post(
    "",
    summary="Create a project owned by the caller",
    status_code=status.HTTP_201_CREATED,
    response_model=ProjectCreated,
)
def create_project(
    payload: ProjectCreate,
    identity: CurrentIdentityDep,
    db: SessionDep,
) -> ProjectCreated:
    """Store a project; the owner always comes from the verified token."""
    try:
        project = ProjectRepository(db).create(identity.subject, payload.name, payload.data)
    except SQLAlchemyError as err:
        raise StoreError("Error creating project", detail=str(err)) from err

    logger.info("Created project %s for %s", project.id, identity.subject)
    return ProjectCreated(message="Project created", project=ProjectOut.model_validate(project))


@router.get(
    "",
    summary="List the caller's projects",
    response_model=list[ProjectOut],
)
def list_projects(identity: CurrentIdentityDep, db: SessionDep) -> list[ProjectOut]:
    """Return every project owned by the caller, and nothing else."""
    try:
        projects = ProjectRepository(db).list_by_owner(identity.subject)
    except SQLAlchemyError as err:
        raise StoreError("Error fetching projects", detail=str(err)) from err
    return [ProjectOut.model_validate(project) for project in projects]
