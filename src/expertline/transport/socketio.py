"""
Socket.IO transport — host and UI in separate processes.

The host runs an AsyncServer and talks to exactly one UI connection at a time;
the UI connects with an AsyncClient. Every envelope travels on the `envelope`
event. Sends are scheduled on the running loop and never block the caller.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import socketio

from expertline.models.envelope import Envelope
from expertline.transport.base import Endpoint
from expertline.transport.envelope import to_wire

logger = logging.getLogger(__name__)

ENVELOPE_EVENT = "envelope"
SOCKETIO_PATH = "bridge/socket.io"


class _EmitterMixin:
    _tasks: set[asyncio.Task[Any]]

    def _schedule(self, coro: Any, kind: str) -> None:
        async def _do_emit() -> None:
            try:
                await coro
            except Exception as e:
                logger.error("Emit failed for %s envelope: %s", kind, e)

        task = asyncio.get_running_loop().create_task(_do_emit())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


class SocketIOServerEndpoint(_EmitterMixin, Endpoint):
    """Host side. The most recent UI connection is the attached one."""

    def __init__(
        self,
        sio: Optional[socketio.AsyncServer] = None,
        on_attach: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__()
        self._on_attach = on_attach
        self.sio = sio or socketio.AsyncServer(async_mode="asgi", cors_allowed_origins="*")
        self._sid: Optional[str] = None
        self._tasks = set()
        self.sio.on("connect", self._on_connect)
        self.sio.on("disconnect", self._on_disconnect)
        self.sio.on(ENVELOPE_EVENT, self._on_envelope)

    @property
    def connected(self) -> bool:
        return self._sid is not None

    def asgi_app(self, on_shutdown: Optional[Callable[[], Any]] = None) -> socketio.ASGIApp:
        return socketio.ASGIApp(self.sio, socketio_path=SOCKETIO_PATH, on_shutdown=on_shutdown)

    async def _on_connect(self, sid: str, environ: dict[str, Any], auth: Any = None) -> None:
        if self._sid is not None:
            logger.info("UI %s replaces %s", sid, self._sid)
        self._sid = sid
        if self._on_attach is not None:
            self._on_attach(sid)

    async def _on_disconnect(self, sid: str, reason: Any = None) -> None:
        if sid == self._sid:
            logger.info("UI %s disconnected", sid)
            self._sid = None

    async def _on_envelope(self, sid: str, data: Any) -> None:
        if sid != self._sid:
            logger.debug("Ignoring envelope from stale UI %s", sid)
            return
        self._dispatch(data)

    def send(self, envelope: Envelope) -> None:
        if self._sid is None:
            logger.debug("No UI connected, dropped %s envelope", envelope.kind)
            return
        self._schedule(self.sio.emit(ENVELOPE_EVENT, to_wire(envelope), to=self._sid), envelope.kind)


class SocketIOClientEndpoint(_EmitterMixin, Endpoint):
    """UI side of a socket.io bridge."""

    def __init__(
        self,
        url: str,
        transports: Optional[list[str]] = None,
        sio: Optional[socketio.AsyncClient] = None,
    ) -> None:
        super().__init__()
        self._url = url
        self._transports = transports or ["websocket"]
        self._sio = sio or socketio.AsyncClient()
        self._tasks = set()
        self._sio.on(ENVELOPE_EVENT, self._on_envelope)

    @property
    def connected(self) -> bool:
        return self._sio.connected

    async def connect(self) -> None:
        if self._sio.connected:
            return
        await self._sio.connect(self._url, transports=self._transports, socketio_path=SOCKETIO_PATH)

    async def _on_envelope(self, data: Any) -> None:
        self._dispatch(data)

    def send(self, envelope: Envelope) -> None:
        if not self._sio.connected:
            raise RuntimeError("Socket.IO not connected")
        self._schedule(self._sio.emit(ENVELOPE_EVENT, to_wire(envelope)), envelope.kind)

    async def disconnect(self) -> None:
        await self._sio.disconnect()
