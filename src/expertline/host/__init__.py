from expertline.host.executor import RequestExecutor
from expertline.host.panel import HostBridge
from expertline.host.pusher import PushBatch, SelectionPusher
from expertline.host.view import ViewHolder, ViewState

__all__ = ["HostBridge", "PushBatch", "RequestExecutor", "SelectionPusher", "ViewHolder", "ViewState"]
