"""
Selection state on the UI side: fed by host pushes.
"""

import logging
from typing import Callable, Optional

from expertline.models.envelope import Envelope, PushEnvelope
from expertline.transport.base import Endpoint

logger = logging.getLogger(__name__)

PLACEHOLDER = "First select code and press ALT + X to see the results."


class SelectionState:
    """Last-write-wins holder for the pushed selection text.

    Every push overwrites the text; a push equal to the current text changes
    nothing and does not re-trigger auto mode.
    """

    def __init__(
        self,
        text: str = PLACEHOLDER,
        auto_mode: bool = False,
        on_selection: Optional[Callable[[str], None]] = None,
    ):
        self.text = text
        self.auto_mode = auto_mode
        self._on_selection = on_selection
        self.updates = 0

    def apply(self, text: str) -> bool:
        """Overwrite the text. Returns True when it changed."""
        if text == self.text:
            return False
        self.text = text
        self.updates += 1
        if self.auto_mode and self._on_selection and text.strip() and text.strip() != PLACEHOLDER:
            self._on_selection(text)
        return True

    def bind(self, endpoint: Endpoint) -> Callable[[], None]:
        """Apply every push arriving on `endpoint`. Returns the unbind function."""
        def listener(envelope: Envelope) -> None:
            if isinstance(envelope, PushEnvelope):
                self.apply(envelope.payload)
        return endpoint.add_listener(listener)
