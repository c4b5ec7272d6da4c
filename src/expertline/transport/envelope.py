"""
Envelope construction and parsing.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from expertline.models.envelope import (
    ENVELOPE_ADAPTER,
    CallEnvelope,
    Envelope,
    ErrorEnvelope,
    PushEnvelope,
    ResultEnvelope,
)

logger = logging.getLogger(__name__)


def to_wire(envelope: Envelope) -> dict[str, Any]:
    """Serialize an envelope to the camelCase dict that crosses the transport."""
    return envelope.model_dump(by_alias=True, mode="json")


def build_call(correlation_id: str, endpoint: str, payload: Any) -> CallEnvelope:
    return CallEnvelope(correlation_id=correlation_id, endpoint=endpoint, payload=payload)


def build_result(correlation_id: str, body: Any) -> ResultEnvelope:
    return ResultEnvelope(correlation_id=correlation_id, body=body)


def build_error(correlation_id: str, message: str, code: Optional[str] = None) -> ErrorEnvelope:
    return ErrorEnvelope(correlation_id=correlation_id, message=message, code=code)


def build_push(text: str) -> PushEnvelope:
    return PushEnvelope(payload=text)


def parse_envelope(raw: Any) -> Optional[Envelope]:
    """Parse a wire message into an envelope. Returns None if invalid."""
    try:
        return ENVELOPE_ADAPTER.validate_python(raw)
    except ValidationError as e:
        logger.debug("Dropping malformed envelope: %s", e.error_count())
        return None
