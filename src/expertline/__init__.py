"""
expertline-bridge — request/response bridge between a sandboxed UI and a
privileged host.

The UI has no network; the host does. The UI sends correlated `call`
envelopes and the host answers each with one `result` or `error` envelope.
The host also pushes the editor selection into a UI of unknown readiness.
"""

__version__ = "0.1.0"

from expertline.errors import (
    BridgeError,
    ConnectivityError,
    MalformedResponseError,
    RequestTimeoutError,
)
from expertline.host import HostBridge, RequestExecutor, SelectionPusher, ViewHolder
from expertline.transport import MemoryChannel
from expertline.ui import CompareAPI, RequestClient, SelectionState

__all__ = [
    "BridgeError",
    "CompareAPI",
    "ConnectivityError",
    "HostBridge",
    "MalformedResponseError",
    "MemoryChannel",
    "RequestClient",
    "RequestExecutor",
    "RequestTimeoutError",
    "SelectionPusher",
    "SelectionState",
    "ViewHolder",
]
