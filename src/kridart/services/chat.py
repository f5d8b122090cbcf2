"""Real-time chat hub: live connections, history replay and broadcast.

Every connection owns an outbound FIFO drained by its own writer task
(:meth:`ChatConnection.pump`). The hub never awaits a client socket; it only
enqueues frames, and it does so while holding its lock, so all connections see
``newMessage`` frames in persistence order and the history frame always
precedes any broadcast.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Protocol

from pydantic import ValidationError as PayloadError
from starlette.concurrency import run_in_threadpool
from starlette.websockets import WebSocketDisconnect

from kridart.core.errors import StoreError
from kridart.schemas.chat import ChatMessageOut, ChatSendPayload

logger = logging.getLogger(__name__)

__all__ = [
    "ChatConnection",
    "ChatHub",
    "ERROR_EVENT",
    "HISTORY_EVENT",
    "MessageStore",
    "NEW_MESSAGE_EVENT",
    "SEND_MESSAGE_EVENT",
]

SEND_MESSAGE_EVENT = "sendMessage"
HISTORY_EVENT = "messageHistory"
NEW_MESSAGE_EVENT = "newMessage"
ERROR_EVENT = "error"

Frame = dict[str, Any]


class MessageStore(Protocol):
    """Blocking persistence used by the hub; called from the thread pool."""

    def append(self, username: str, message: str) -> ChatMessageOut: ...

    def history(self) -> list[ChatMessageOut]: ...


class ChatConnection:
    """One live client with its own ordered outbound queue."""

    def __init__(self, send: Callable[[Frame], Awaitable[None]], *, label: str = "-") -> None:
        self.label = label
        self._send = send
        self._outbox: asyncio.Queue[Frame | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, event: str, data: Any) -> None:
        """Queue a frame for delivery; ignored once the connection is closed."""
        if self._closed:
            return
        self._outbox.put_nowait({"event": event, "data": data})

    def close(self) -> None:
        """Stop accepting frames; the writer exits after flushing the queue."""
        if self._closed:
            return
        self._closed = True
        self._outbox.put_nowait(None)

    async def pump(self) -> None:
        """Deliver queued frames in order until :meth:`close` is called."""
        while True:
            frame = await self._outbox.get()
            if frame is None:
                return
            try:
                await self._send(frame)
            except (WebSocketDisconnect, RuntimeError, OSError) as exc:
                logger.debug("Dropping frames for %s: %s", self.label, exc)
                self._closed = True
                return


class ChatHub:
    """Registry of live chat connections backed by a message store."""

    def __init__(self, store: MessageStore) -> None:
        self._store = store
        self._connections: set[ChatConnection] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    async def on_connect(self, connection: ChatConnection) -> bool:
        """Replay history to ``connection`` alone, then register it.

        Returns:
            False if the history could not be loaded; the connection is then
            sent an ``error`` frame and is not registered.
        """
        async with self._lock:
            try:
                history = await run_in_threadpool(self._store.history)
            except StoreError as exc:
                logger.error("History replay failed for %s: %s", connection.label, exc.detail)
                connection.enqueue(ERROR_EVENT, {"message": exc.message})
                return False
            connection.enqueue(HISTORY_EVENT, [message.to_wire() for message in history])
            self._connections.add(connection)
            total = len(self._connections)
        logger.info("Chat client %s connected (%d live)", connection.label, total)
        return True

    async def on_send(
        self, connection: ChatConnection, payload: Mapping[str, Any] | Any
    ) -> ChatMessageOut | None:
        """Persist a message and broadcast it to every live connection.

        Invalid payloads and persistence failures are reported to the sender
        only and nothing is broadcast.
        """
        try:
            data = ChatSendPayload.model_validate(payload)
        except PayloadError:
            connection.enqueue(ERROR_EVENT, {"message": "Invalid message payload"})
            return None
        if not data.message.strip():
            connection.enqueue(ERROR_EVENT, {"message": "Message must not be empty"})
            return None

        async with self._lock:
            try:
                stored = await run_in_threadpool(self._store.append, data.username, data.message)
            except StoreError as exc:
                logger.error("Chat message from %s not persisted: %s", connection.label, exc.detail)
                connection.enqueue(ERROR_EVENT, {"message": exc.message})
                return None

            frame = stored.to_wire()
            recipients = tuple(self._connections)
            for peer in recipients:
                peer.enqueue(NEW_MESSAGE_EVENT, frame)
        logger.debug("Broadcast message %d to %d connections", stored.id, len(recipients))
        return stored

    async def on_disconnect(self, connection: ChatConnection) -> None:
        """Remove ``connection`` from the live set and close its queue."""
        async with self._lock:
            self._connections.discard(connection)
            total = len(self._connections)
        connection.close()
        logger.info("Chat client %s disconnected (%d live)", connection.label, total)
