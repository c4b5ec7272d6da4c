"""
Redundant delivery of host-known text (the editor selection) into the UI.

The host cannot observe when the UI finished loading, so each push is sent
immediately and again at fixed later offsets. Nothing is acknowledged; the UI
applies pushes as last-write-wins, which makes the repeats harmless.

Each `push()` creates a `PushBatch`, whose timers live in the pusher's arena
until the last send fires or the batch is cancelled.
"""

import asyncio
import logging
from typing import Optional, Sequence

from expertline.host.view import ViewHolder
from expertline.transport.envelope import build_push

logger = logging.getLogger(__name__)

DEFAULT_OFFSETS_S = (0.0, 0.15, 0.5)


class PushBatch:
    """One logical delivery: Sent(0) -> Sent(1) -> ... -> Done."""

    def __init__(self, text: str, offsets: Sequence[float]):
        self.text = text
        self.offsets = tuple(offsets)
        self.sent = 0
        self.delivered = 0
        self.cancelled = False
        self.handles: list[asyncio.TimerHandle] = []

    @property
    def done(self) -> bool:
        return self.cancelled or self.sent >= len(self.offsets)

    @property
    def state(self) -> str:
        if self.cancelled:
            return "Cancelled"
        if self.done:
            return "Done"
        return f"Sent({self.sent - 1})" if self.sent else "Scheduled"

    def cancel(self) -> None:
        for handle in self.handles:
            handle.cancel()
        self.cancelled = True

    def __repr__(self) -> str:
        return f"PushBatch(state={self.state!r}, sent={self.sent}/{len(self.offsets)})"


class SelectionPusher:
    def __init__(self, view: ViewHolder, offsets: Sequence[float] = DEFAULT_OFFSETS_S):
        if not offsets:
            raise ValueError("offsets must not be empty")
        self._view = view
        self._offsets = tuple(sorted(offsets))
        self._pending: list[PushBatch] = []

    @property
    def pending(self) -> list[PushBatch]:
        """Batches with sends still scheduled."""
        return list(self._pending)

    def push(self, text: str, loop: Optional[asyncio.AbstractEventLoop] = None) -> PushBatch:
        loop = loop or asyncio.get_running_loop()
        batch = PushBatch(text, self._offsets)
        for offset in self._offsets:
            if offset <= 0:
                self._send(batch)
            else:
                batch.handles.append(loop.call_later(offset, self._send, batch))
        if not batch.done:
            self._pending.append(batch)
        logger.debug("Pushing selection (%d chars) at offsets %s", len(text), self._offsets)
        return batch

    def _send(self, batch: PushBatch) -> None:
        if self._view.post(build_push(batch.text)):
            batch.delivered += 1
        batch.sent += 1
        if batch.done and batch in self._pending:
            self._pending.remove(batch)

    def cancel_all(self) -> None:
        for batch in self._pending:
            batch.cancel()
        self._pending.clear()
