from expertline.transport.base import Endpoint, Listener
from expertline.transport.memory import MemoryChannel, MemoryEndpoint

__all__ = ["Endpoint", "Listener", "MemoryChannel", "MemoryEndpoint"]
