"""SQLAlchemy models for the KridArt backend."""

from .asset import Asset
from .chat_message import ChatMessage
from .project import Project
from .user import User

__all__ = [
    "Asset",
    "ChatMessage",
    "Project",
    "User",
]
