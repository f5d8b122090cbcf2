"""Data access helpers wrapping SQLAlchemy sessions."""

from .asset_repo import AssetRepository
from .message_repo import MessageRepository, SqlMessageStore
from .project_repo import ProjectRepository
from .user_repo import UserRepository

__all__ = [
    "AssetRepository",
    "MessageRepository",
    "ProjectRepository",
    "SqlMessageStore",
    "UserRepository",
]
