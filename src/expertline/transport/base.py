"""
Transport endpoint: one side of the bidirectional host/UI message channel.

Delivery is best-effort and FIFO per direction. There is no addressing or
correlation beyond the envelope contents.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from expertline.models.envelope import Envelope
from expertline.transport.envelope import parse_envelope

logger = logging.getLogger(__name__)

Listener = Callable[[Envelope], None]


class Endpoint(ABC):
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, handler: Listener) -> Callable[[], None]:
        """Add an envelope listener. Returns a cleanup function; calling it twice is harmless."""
        self._listeners.append(handler)
        def remove() -> None:
            try:
                self._listeners.remove(handler)
            except ValueError:
                pass
        return remove

    @abstractmethod
    def send(self, envelope: Envelope) -> None:
        """Send an envelope to the other side. Never blocks; may be dropped."""

    def _dispatch(self, raw: Any) -> None:
        envelope = parse_envelope(raw)
        if envelope is None:
            return
        for handler in list(self._listeners):
            try:
                handler(envelope)
            except Exception:
                logger.exception("Listener failed on %s envelope", envelope.kind)
