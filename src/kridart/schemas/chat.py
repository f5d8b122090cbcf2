"""Chat channel payload schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChatSendPayload(BaseModel):
    """Data carried by a ``sendMessage`` frame."""

    username: str = Field("", description="Display name asserted by the client")
    message: str = Field(..., description="Message text")


class ChatMessageOut(BaseModel):
    """Persisted chat message delivered to clients."""

    id: int
    username: str
    message: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = ConfigDict(from_attributes=True)

    def to_wire(self) -> dict[str, object]:
        """Return the JSON-ready form used in WebSocket frames."""
        return self.model_dump(mode="json", by_alias=True)
