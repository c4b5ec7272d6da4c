"""Shared test fixtures."""

import json
from typing import Any, Callable

import httpx
import pytest

from expertline.host import HostBridge, RequestExecutor
from expertline.transport import MemoryChannel

API_URL = "https://api.test/compare"


def make_executor(handler: Callable[[httpx.Request], Any], timeout: float = 30.0) -> RequestExecutor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RequestExecutor(http_client=client, timeout=timeout)


def echo_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"echo": json.loads(request.content)})


@pytest.fixture
def channel() -> MemoryChannel:
    return MemoryChannel()


@pytest.fixture
def bridge(channel: MemoryChannel) -> HostBridge:
    host = HostBridge(executor=make_executor(echo_handler), push_offsets=(0.0, 0.01, 0.03))
    host.resolve_view(channel.host)
    return host
