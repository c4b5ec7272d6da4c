"""
Expertline bridge error types: one class per failure classification.

Host side converts every failure into an `error` envelope carrying one of these
codes; UI side turns the envelope back into the matching exception.
"""

import asyncio
import json
from typing import Any, Optional

import httpx

CONNECTIVITY = "connectivity"
TIMEOUT = "timeout"
MALFORMED_RESPONSE = "malformed_response"
UNKNOWN = "unknown"

CONNECTIVITY_MESSAGE = "Cannot connect to Expertline API server. Please check your internet connection."
TIMEOUT_MESSAGE = "Request timed out. The API server may be slow to respond."
MALFORMED_MESSAGE = "Invalid response from API server."
UNKNOWN_MESSAGE = "Unknown error occurred"


class BridgeError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details


class ConnectivityError(BridgeError):
    def __init__(self, message: str = CONNECTIVITY_MESSAGE):
        super().__init__(CONNECTIVITY, message)


class RequestTimeoutError(BridgeError):
    def __init__(self, message: str = TIMEOUT_MESSAGE):
        super().__init__(TIMEOUT, message)


class MalformedResponseError(BridgeError):
    def __init__(self, message: str = MALFORMED_MESSAGE, details: Optional[dict[str, Any]] = None):
        super().__init__(MALFORMED_RESPONSE, message, details)


_BY_CODE = {
    CONNECTIVITY: ConnectivityError,
    TIMEOUT: RequestTimeoutError,
    MALFORMED_RESPONSE: MalformedResponseError,
}


def classify_exception(exc: BaseException) -> tuple[str, str]:
    """Map a failure raised while talking to the API to (code, human-readable message)."""
    if isinstance(exc, httpx.ConnectError):
        return CONNECTIVITY, CONNECTIVITY_MESSAGE
    if isinstance(exc, (httpx.TimeoutException, asyncio.TimeoutError)):
        return TIMEOUT, TIMEOUT_MESSAGE
    if isinstance(exc, json.JSONDecodeError):
        return MALFORMED_RESPONSE, MALFORMED_MESSAGE
    if isinstance(exc, BridgeError):
        return exc.code, exc.message
    return UNKNOWN, str(exc) or UNKNOWN_MESSAGE


def classify_message(message: str) -> str:
    """Best-effort code for an error envelope that arrived without one."""
    lowered = message.lower()
    if "cannot connect" in lowered:
        return CONNECTIVITY
    if "timed out" in lowered or "timeout" in lowered:
        return TIMEOUT
    if "invalid response" in lowered or "invalid json" in lowered:
        return MALFORMED_RESPONSE
    return UNKNOWN


def error_from_envelope(code: Optional[str], message: str) -> BridgeError:
    """Rebuild the exception a host-side `error` envelope describes."""
    code = code or classify_message(message)
    cls = _BY_CODE.get(code)
    if cls is None:
        return BridgeError(code, message)
    return cls(message)
