"""
In-process transport: a pair of endpoints sharing one event loop.

Used when host and UI run in the same process (CLI `compare`, tests). Messages
are serialized to wire dicts and delivered with `loop.call_soon`, so each side
sees them as discrete events in send order. An endpoint that is not ready drops
whatever reaches it, like a UI whose script has not loaded yet.
"""

import asyncio
import logging
from typing import Any, Optional

from expertline.models.envelope import Envelope
from expertline.transport.base import Endpoint
from expertline.transport.envelope import to_wire

logger = logging.getLogger(__name__)


class MemoryEndpoint(Endpoint):
    def __init__(self, name: str, ready: bool = True) -> None:
        super().__init__()
        self.name = name
        self._ready = ready
        self._peer: Optional["MemoryEndpoint"] = None
        self.dropped = 0

    @property
    def ready(self) -> bool:
        return self._ready

    def mark_ready(self) -> None:
        self._ready = True

    def send(self, envelope: Envelope) -> None:
        if self._peer is None:
            raise RuntimeError(f"Endpoint {self.name!r} is not connected to a peer")
        raw = to_wire(envelope)
        asyncio.get_running_loop().call_soon(self._peer._deliver, raw)

    def _deliver(self, raw: dict[str, Any]) -> None:
        if not self._ready:
            self.dropped += 1
            logger.debug("%s not ready, dropped %s envelope", self.name, raw.get("kind"))
            return
        self._dispatch(raw)


class MemoryChannel:
    """Connected host/UI endpoint pair."""

    def __init__(self, host_ready: bool = True, ui_ready: bool = True) -> None:
        self.host = MemoryEndpoint("host", ready=host_ready)
        self.ui = MemoryEndpoint("ui", ready=ui_ready)
        self.host._peer = self.ui
        self.ui._peer = self.host
