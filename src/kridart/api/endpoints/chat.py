"""WebSocket endpoint for the shared chat channel.

Frames are JSON objects ``{"event": <name>, "data": <payload>}``. The only
client event is ``sendMessage``; the server emits ``messageHistory`` once on
connect, ``newMessage`` for every persisted message and ``error`` to a single
client when one of its frames is rejected.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

from kridart.services.chat import (
    ERROR_EVENT,
    SEND_MESSAGE_EVENT,
    ChatConnection,
    ChatHub,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def _is_ws_connected(websocket: WebSocket) -> bool:
    return (
        websocket.client_state == WebSocketState.CONNECTED
        and websocket.application_state == WebSocketState.CONNECTED
    )


def _parse_frame(raw: str | None) -> tuple[str, Any] | None:
    """Return ``(event, data)`` for a well-formed text frame, else None."""
    if raw is None:
        return None
    try:
        frame = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(frame, dict) or not isinstance(frame.get("event"), str):
        return None
    return frame["event"], frame.get("data")


@router.websocket("/ws/chat")
async def chat_socket(websocket: WebSocket) -> None:
    """Attach a client to the chat hub for the lifetime of its socket."""
    hub: ChatHub = websocket.app.state.chat_hub
    await websocket.accept()

    client = websocket.client
    label = f"{client.host}:{client.port}" if client else "-"
    connection = ChatConnection(websocket.send_json, label=label)
    writer = asyncio.create_task(connection.pump())
    close_code = status.WS_1000_NORMAL_CLOSURE

    try:
        # No client frame is read before the history has been queued.
        if not await hub.on_connect(connection):
            close_code = status.WS_1011_INTERNAL_ERROR
            return
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", status.WS_1000_NORMAL_CLOSURE))
            # Binary frames carry "bytes" instead of "text".
            frame = _parse_frame(message.get("text"))
            if frame is None:
                connection.enqueue(ERROR_EVENT, {"message": "Invalid frame"})
                continue
            event, data = frame
            if event == SEND_MESSAGE_EVENT:
                await hub.on_send(connection, data)
            else:
                connection.enqueue(ERROR_EVENT, {"message": f"Unknown event: {event}"})
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("Chat session %s failed", label)
        close_code = status.WS_1011_INTERNAL_ERROR
    finally:
        await hub.on_disconnect(connection)
        await writer
        if _is_ws_connected(websocket):
            await websocket.close(code=close_code)
