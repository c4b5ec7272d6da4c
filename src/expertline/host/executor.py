"""
Host request executor — performs the UI's network calls.

One `call` envelope in, exactly one POST out, exactly one `result` or `error`
envelope back. Nothing raised here ever reaches the UI as a fault; every
failure path ends in an `error` envelope carrying a classification code.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import httpx

from expertline import __version__
from expertline.errors import classify_exception
from expertline.models.envelope import CallEnvelope, ResponseEnvelope
from expertline.transport.envelope import build_error, build_result

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0
USER_AGENT = f"expertline-bridge/{__version__}"


class RequestExecutor:
    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        user_agent: str = USER_AGENT,
    ):
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent,
        }
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def execute(self, call: CallEnvelope) -> ResponseEnvelope:
        """POST the payload as JSON and wrap the parsed body (or the failure) in a response envelope."""
        logger.info("Calling %s for %s", call.endpoint, call.correlation_id)
        try:
            # overall deadline; httpx timeouts only bound each phase
            resp = await asyncio.wait_for(
                self._client.post(call.endpoint, json=call.payload, headers=self._headers, timeout=self._timeout),
                timeout=self._timeout,
            )
            body = resp.json()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            code, message = classify_exception(e)
            logger.warning("Call %s to %s failed (%s): %r", call.correlation_id, call.endpoint, code, e)
            return build_error(call.correlation_id, message, code)
        logger.debug("Call %s answered with HTTP %s", call.correlation_id, resp.status_code)
        return build_result(call.correlation_id, body)

    def handle(self, call: CallEnvelope, reply: Callable[[ResponseEnvelope], None]) -> asyncio.Task[None]:
        """Run `execute` as an independent task and pass its response to `reply`."""

        async def _run() -> None:
            response = await self.execute(call)
            try:
                reply(response)
            except Exception:
                logger.exception("Failed to deliver response for %s", call.correlation_id)

        task = asyncio.get_running_loop().create_task(_run())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def aclose(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
        if self._owns_client:
            await self._client.aclose()
