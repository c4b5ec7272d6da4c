"""Socket.IO endpoints, exercised against in-memory stand-ins for the sio objects."""

import asyncio
from typing import Any, Optional

import pytest

from expertline.models.envelope import CallEnvelope
from expertline.transport.envelope import build_call, build_push
from expertline.transport.socketio import ENVELOPE_EVENT, SocketIOClientEndpoint, SocketIOServerEndpoint


class FakeSio:
    def __init__(self, connected: bool = False) -> None:
        self.handlers: dict[str, Any] = {}
        self.emitted: list[tuple[str, Any, Optional[str]]] = []
        self.connected = connected

    def on(self, event: str, handler: Any = None) -> None:
        self.handlers[event] = handler

    async def emit(self, event: str, data: Any, to: Optional[str] = None) -> None:
        self.emitted.append((event, data, to))

    async def connect(self, url: str, **kwargs: Any) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False


class TestServerEndpoint:
    @pytest.mark.asyncio
    async def test_sends_to_attached_ui(self):
        attached = []
        sio = FakeSio()
        endpoint = SocketIOServerEndpoint(sio=sio, on_attach=attached.append)
        await sio.handlers["connect"]("sid-1", {})
        assert endpoint.connected
        assert attached == ["sid-1"]

        endpoint.send(build_push("text"))
        await asyncio.sleep(0)
        assert sio.emitted == [(ENVELOPE_EVENT, {"kind": "push", "payload": "text"}, "sid-1")]

    @pytest.mark.asyncio
    async def test_drops_without_ui(self):
        sio = FakeSio()
        endpoint = SocketIOServerEndpoint(sio=sio)
        endpoint.send(build_push("text"))
        await sio.handlers["connect"]("sid-1", {})
        await sio.handlers["disconnect"]("sid-1")
        endpoint.send(build_push("text"))
        await asyncio.sleep(0)
        assert sio.emitted == []
        assert not endpoint.connected

    @pytest.mark.asyncio
    async def test_only_latest_ui_is_heard(self):
        sio = FakeSio()
        endpoint = SocketIOServerEndpoint(sio=sio)
        received = []
        endpoint.add_listener(received.append)
        await sio.handlers["connect"]("old", {})
        await sio.handlers["connect"]("new", {})

        wire = {"kind": "call", "correlationId": "1", "endpoint": "u", "payload": None}
        await sio.handlers[ENVELOPE_EVENT]("old", wire)
        await sio.handlers[ENVELOPE_EVENT]("new", wire)
        await sio.handlers[ENVELOPE_EVENT]("new", {"kind": "bogus"})
        assert len(received) == 1
        assert isinstance(received[0], CallEnvelope)


class TestClientEndpoint:
    @pytest.mark.asyncio
    async def test_connect_send_receive(self):
        sio = FakeSio()
        endpoint = SocketIOClientEndpoint("http://localhost:8765", sio=sio)
        received = []
        endpoint.add_listener(received.append)

        with pytest.raises(RuntimeError):
            endpoint.send(build_call("1", "u", {}))
        await endpoint.connect()
        endpoint.send(build_call("1", "u", {"a": 1}))
        await asyncio.sleep(0)
        assert sio.emitted[0][0] == ENVELOPE_EVENT
        assert sio.emitted[0][1]["correlationId"] == "1"

        await sio.handlers[ENVELOPE_EVENT]({"kind": "result", "correlationId": "1", "body": 2})
        assert received[0].body == 2

        await endpoint.disconnect()
        assert not endpoint.connected
