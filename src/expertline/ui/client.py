"""
UI request client: network calls from a context that has no network.

`call()` sends a `call` envelope through the transport and suspends until the
`result`/`error` envelope with the same correlation id arrives or the timeout
fires, whichever comes first. Each pending call owns one transport listener,
removed on every resolution path.
"""

import asyncio
import itertools
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from expertline.errors import BridgeError, RequestTimeoutError, error_from_envelope
from expertline.models.envelope import Envelope, ErrorEnvelope, ResultEnvelope
from expertline.transport.base import Endpoint
from expertline.transport.envelope import build_call

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


@dataclass
class PendingCall:
    correlation_id: str
    registered_at: float
    future: "asyncio.Future[Any]"
    timeout_handle: Optional[asyncio.TimerHandle] = None
    remove_listener: Optional[Callable[[], None]] = None


class RequestClient:
    def __init__(self, endpoint: Endpoint, timeout: float = DEFAULT_TIMEOUT_S):
        self._endpoint = endpoint
        self._timeout = timeout
        self._session = uuid.uuid4().hex[:8]
        self._counter = itertools.count(1)
        self._pending: dict[str, PendingCall] = {}

    @property
    def pending(self) -> dict[str, PendingCall]:
        return dict(self._pending)

    def _next_id(self) -> str:
        while True:
            correlation_id = f"{self._session}-{next(self._counter)}"
            if correlation_id not in self._pending:
                return correlation_id

    async def call(self, url: str, payload: Any) -> Any:
        """Ask the host to POST `payload` to `url`; return the parsed response body.

        Raises a BridgeError subclass on connectivity, timeout, malformed
        response or any other failure.
        """
        loop = asyncio.get_running_loop()
        correlation_id = self._next_id()
        record = PendingCall(correlation_id, time.monotonic(), loop.create_future())
        self._pending[correlation_id] = record

        def listener(envelope: Envelope) -> None:
            if isinstance(envelope, (ResultEnvelope, ErrorEnvelope)) and envelope.correlation_id == correlation_id:
                self._settle(correlation_id, envelope)

        record.remove_listener = self._endpoint.add_listener(listener)
        try:
            self._endpoint.send(build_call(correlation_id, url, payload))
        except Exception as e:
            self._settle(correlation_id, BridgeError("transport_error", f"Failed to send request: {e}"))
        else:
            record.timeout_handle = loop.call_later(self._timeout, self._expire, correlation_id)

        try:
            return await record.future
        finally:
            # no-op unless the awaiting task itself was cancelled
            self._release(correlation_id)

    def _release(self, correlation_id: str) -> Optional[PendingCall]:
        record = self._pending.pop(correlation_id, None)
        if record is None:
            return None
        if record.timeout_handle is not None:
            record.timeout_handle.cancel()
        if record.remove_listener is not None:
            record.remove_listener()
        return record

    def _settle(self, correlation_id: str, outcome: Any) -> None:
        record = self._release(correlation_id)
        if record is None or record.future.done():
            return
        if isinstance(outcome, ResultEnvelope):
            record.future.set_result(outcome.body)
        elif isinstance(outcome, ErrorEnvelope):
            record.future.set_exception(error_from_envelope(outcome.code, outcome.message))
        else:
            record.future.set_exception(outcome)

    def _expire(self, correlation_id: str) -> None:
        logger.warning("Call %s timed out after %ss", correlation_id, self._timeout)
        self._settle(
            correlation_id,
            RequestTimeoutError(f"Request timed out after {self._timeout:g} seconds. Please try again."),
        )

    def close(self) -> None:
        """Fail every pending call and drop its listener."""
        for correlation_id in list(self._pending):
            self._settle(correlation_id, BridgeError("closed", "Request client closed"))
