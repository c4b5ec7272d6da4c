"""
Host bridge — everything the privileged side does for one UI view.

Owns the view lifecycle, the request executor and the selection pusher, and
dispatches incoming UI envelopes by kind.
"""

import logging
from typing import Callable, Optional, Sequence

from expertline.host.executor import RequestExecutor
from expertline.host.pusher import DEFAULT_OFFSETS_S, PushBatch, SelectionPusher
from expertline.host.view import ViewHolder, ViewState
from expertline.models.envelope import (
    CallEnvelope,
    Envelope,
    ErrorEnvelope,
    NotifyEnvelope,
    OpenLinkEnvelope,
    PushEnvelope,
    ResultEnvelope,
)
from expertline.transport.base import Endpoint

logger = logging.getLogger(__name__)


def _log_notify(level: str, text: str) -> None:
    if level == "error":
        logger.error("UI: %s", text)
    else:
        logger.info("UI: %s", text)


def _log_open_link(url: str) -> None:
    logger.info("UI asked to open %s", url)


class HostBridge:
    def __init__(
        self,
        executor: Optional[RequestExecutor] = None,
        push_offsets: Sequence[float] = DEFAULT_OFFSETS_S,
        on_notify: Callable[[str, str], None] = _log_notify,
        on_open_link: Callable[[str], None] = _log_open_link,
    ):
        self.view = ViewHolder()
        self.executor = executor or RequestExecutor()
        self.pusher = SelectionPusher(self.view, push_offsets)
        self._on_notify = on_notify
        self._on_open_link = on_open_link
        self._remove_listener: Optional[Callable[[], None]] = None

    @property
    def attached(self) -> bool:
        return self.view.state is ViewState.ATTACHED

    def resolve_view(self, endpoint: Endpoint) -> None:
        """Attach a (new) UI view and start serving its envelopes."""
        if self._remove_listener:
            self._remove_listener()
        self.view.attach(endpoint)
        self._remove_listener = endpoint.add_listener(self._on_envelope)

    def post_selection(self, text: str) -> PushBatch:
        return self.pusher.push(text)

    def _on_envelope(self, envelope: Envelope) -> None:
        match envelope:
            case CallEnvelope():
                self.executor.handle(envelope, self.view.post)
            case NotifyEnvelope(level=level, text=text):
                self._on_notify(level, text)
            case OpenLinkEnvelope(url=url):
                self._on_open_link(url)
            case ResultEnvelope() | ErrorEnvelope() | PushEnvelope():
                logger.debug("Ignoring host-bound %s envelope", envelope.kind)

    def detach(self) -> None:
        self.pusher.cancel_all()
        if self._remove_listener:
            self._remove_listener()
            self._remove_listener = None
        self.view.detach()

    async def dispose(self) -> None:
        self.detach()
        await self.executor.aclose()
