"""Data access helpers for uploaded assets."""
from __future__ import annotations

from sqlalchemy.orm import Session

from kridart.models.asset import Asset

__all__ = ["AssetRepository"]


class AssetRepository:
    """Thin wrapper around database access for asset records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, *, name: str, path: str) -> Asset:
        """Insert an asset record pointing at stored blob ``path``."""
        asset = Asset(name=name, path=path)
        self.session.add(asset)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(asset)
        return asset
