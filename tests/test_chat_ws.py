# tests/test_chat_ws.py
"""End-to-end tests for the chat WebSocket endpoint."""

from __future__ import annotations

from fastapi import status

from kridart.core.errors import StoreError
from kridart.services.chat import ChatHub


def _send(ws, username: str, message: str) -> None:
    ws.send_json({"event": "sendMessage", "data": {"username": username, "message": message}})


def test_connect_receives_empty_history(client) -> None:
    with client.websocket_connect("/ws/chat") as ws:
        assert ws.receive_json() == {"event": "messageHistory", "data": []}


def test_message_is_broadcast_and_persisted(client) -> None:
    with client.websocket_connect("/ws/chat") as ws_a, client.websocket_connect("/ws/chat") as ws_b:
        assert ws_a.receive_json()["event"] == "messageHistory"
        assert ws_b.receive_json()["event"] == "messageHistory"

        _send(ws_a, "ann", "hello")

        for ws in (ws_a, ws_b):
            frame = ws.receive_json()
            assert frame["event"] == "newMessage"
            assert frame["data"]["username"] == "ann"
            assert frame["data"]["message"] == "hello"
            assert {"id", "createdAt"} <= set(frame["data"])

    with client.websocket_connect("/ws/chat") as ws_c:
        history = ws_c.receive_json()
        assert history["event"] == "messageHistory"
        assert [m["message"] for m in history["data"]] == ["hello"]


def test_messages_from_two_clients_share_one_order(client) -> None:
    with client.websocket_connect("/ws/chat") as ws_a, client.websocket_connect("/ws/chat") as ws_b:
        ws_a.receive_json()
        ws_b.receive_json()

        _send(ws_a, "ann", "one")
        assert ws_a.receive_json()["data"]["message"] == "one"
        _send(ws_b, "ben", "two")

        seen_by_a = [ws_a.receive_json()["data"]["message"]]
        seen_by_b = [ws_b.receive_json()["data"]["message"] for _ in range(2)]
        assert seen_by_a == ["two"]
        assert seen_by_b == ["one", "two"]


def test_empty_message_gets_error_frame(client) -> None:
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        _send(ws, "ann", "  ")
        assert ws.receive_json() == {"event": "error", "data": {"message": "Message must not be empty"}}

        # The session stays usable after a rejected frame.
        _send(ws, "ann", "fine")
        assert ws.receive_json()["event"] == "newMessage"


def test_malformed_frames_get_error_frames(client) -> None:
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()

        ws.send_text("not json")
        assert ws.receive_json() == {"event": "error", "data": {"message": "Invalid frame"}}

        ws.send_json({"event": "shout", "data": {}})
        assert ws.receive_json() == {"event": "error", "data": {"message": "Unknown event: shout"}}


def test_binary_frame_gets_error_frame(client) -> None:
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()

        ws.send_bytes(b'{"event": "sendMessage"}')
        assert ws.receive_json() == {"event": "error", "data": {"message": "Invalid frame"}}

        # The session stays usable after a binary frame.
        _send(ws, "ann", "still here")
        assert ws.receive_json()["event"] == "newMessage"


def test_disconnect_removes_connection(client, app) -> None:
    hub = app.state.chat_hub
    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        assert hub.connection_count == 1

    with client.websocket_connect("/ws/chat") as ws:
        ws.receive_json()
        _send(ws, "ann", "after")
        assert ws.receive_json()["event"] == "newMessage"
        assert hub.connection_count == 1


def test_history_failure_closes_session(client, app) -> None:
    class FailingStore:
        def append(self, username, message):
            raise AssertionError("not reached")

        def history(self):
            raise StoreError("Message history unavailable")

    app.state.chat_hub = ChatHub(FailingStore())
    with client.websocket_connect("/ws/chat") as ws:
        assert ws.receive_json() == {"event": "error", "data": {"message": "Message history unavailable"}}
        message = ws.receive()
        assert message["type"] == "websocket.close"
        assert message["code"] == status.WS_1011_INTERNAL_ERROR
