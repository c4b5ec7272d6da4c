from expertline.ui.client import PendingCall, RequestClient
from expertline.ui.compare import CompareAPI, CompareResponse
from expertline.ui.selection import PLACEHOLDER, SelectionState

__all__ = ["CompareAPI", "CompareResponse", "PLACEHOLDER", "PendingCall", "RequestClient", "SelectionState"]
