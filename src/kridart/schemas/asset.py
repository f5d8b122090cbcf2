"""Asset upload schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AssetOut(BaseModel):
    """Uploaded asset metadata."""

    id: int
    name: str
    path: str
    uploaded_at: datetime = Field(serialization_alias="uploadedAt")

    model_config = ConfigDict(from_attributes=True)


class AssetUploaded(BaseModel):
    """Response body for a successful upload."""

    message: str
    asset: AssetOut
