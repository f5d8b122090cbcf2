"""Project document schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProjectCreate(BaseModel):
    """Body of a create-project request; validated by the project store."""

    name: str | None = Field(None, description="Project name")
    data: Any = Field(None, description="Arbitrary JSON payload stored unchanged")


class ProjectOut(BaseModel):
    """Project document as returned by the API."""

    id: str
    name: str
    data: Any
    owner: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)


class ProjectCreated(BaseModel):
    """Response body for a newly created project."""

    message: str
    project: ProjectOut
