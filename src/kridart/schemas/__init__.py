"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .asset import AssetOut, AssetUploaded
from .chat import ChatMessageOut, ChatSendPayload
from .project import ProjectCreate, ProjectCreated, ProjectOut
from .user import CredentialsRequest, LoginResponse, MessageResponse

__all__ = [
    "AssetOut", "AssetUploaded",
    "ChatMessageOut", "ChatSendPayload",
    "ProjectCreate", "ProjectCreated", "ProjectOut",
    "CredentialsRequest", "LoginResponse", "MessageResponse",
]
