"""Asset upload endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, File, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from kridart.api.dependencies import BlobStorageDep, SessionDep
from kridart.core.errors import StoreError, ValidationError
from kridart.repositories.asset_repo import AssetRepository
from kridart.schemas.asset import AssetOut, AssetUploaded

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post(
    "",
    summary="Upload a file to blob storage",
    status_code=status.HTTP_201_CREATED,
    response_model=AssetUploaded,
)
def upload_asset(
    db: SessionDep,
    storage: BlobStorageDep,
    file: Annotated[UploadFile | None, File(description="File to store")] = None,
) -> AssetUploaded:
    """Save the uploaded file and record where it was stored."""
    if file is None or not file.filename:
        raise ValidationError("No file uploaded")

    try:
        blob = storage.save(file.filename, file.file)
        asset = AssetRepository(db).create(name=blob.name, path=blob.path)
    except (OSError, SQLAlchemyError) as err:
        raise StoreError("Asset upload failed", detail=str(err)) from err

    logger.info("Stored asset %d at %s", asset.id, asset.path)
    return AssetUploaded(message="Asset uploaded", asset=AssetOut.model_validate(asset))
