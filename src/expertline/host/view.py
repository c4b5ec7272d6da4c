"""
The single live UI view, as seen from the host.

Lifecycle: UNINITIALIZED -> ATTACHED -> DETACHED (and back to ATTACHED when a
new view resolves). Posting while not attached is a no-op.
"""

import enum
import logging
from typing import Optional

from expertline.models.envelope import Envelope
from expertline.transport.base import Endpoint

logger = logging.getLogger(__name__)


class ViewState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    ATTACHED = "attached"
    DETACHED = "detached"


class ViewHolder:
    def __init__(self) -> None:
        self._endpoint: Optional[Endpoint] = None
        self._state = ViewState.UNINITIALIZED

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def endpoint(self) -> Optional[Endpoint]:
        return self._endpoint

    def attach(self, endpoint: Endpoint) -> None:
        if self._state is ViewState.ATTACHED:
            logger.info("Replacing attached view")
        self._endpoint = endpoint
        self._state = ViewState.ATTACHED

    def detach(self) -> None:
        if self._state is ViewState.ATTACHED:
            self._endpoint = None
            self._state = ViewState.DETACHED

    def post(self, envelope: Envelope) -> bool:
        """Send to the attached view. Returns False when there is none."""
        if self._endpoint is None:
            logger.debug("No view attached, %s envelope not sent", envelope.kind)
            return False
        self._endpoint.send(envelope)
        return True
