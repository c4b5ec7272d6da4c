"""Host request executor against a mocked network."""

import asyncio
import json

import httpx
import pytest

from expertline.errors import CONNECTIVITY, MALFORMED_RESPONSE, TIMEOUT, UNKNOWN
from expertline.models.envelope import ErrorEnvelope, ResultEnvelope
from expertline.transport.envelope import build_call

from conftest import API_URL, make_executor


class TestExecute:
    @pytest.mark.asyncio
    async def test_posts_json_and_returns_result(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"mode": "expert", "comparisons": []})

        executor = make_executor(handler)
        response = await executor.execute(build_call("c-1", API_URL, {"code": "x = 1"}))

        assert isinstance(response, ResultEnvelope)
        assert response.correlation_id == "c-1"
        assert response.body == {"mode": "expert", "comparisons": []}
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert seen[0].headers["content-type"] == "application/json"
        assert seen[0].headers["user-agent"].startswith("expertline-bridge/")
        assert json.loads(seen[0].content) == {"code": "x = 1"}
        await executor.aclose()

    @pytest.mark.asyncio
    async def test_unreachable_endpoint_is_connectivity_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("[Errno 111] Connection refused", request=request)

        executor = make_executor(handler)
        response = await executor.execute(build_call("c-2", API_URL, {}))
        assert isinstance(response, ErrorEnvelope)
        assert response.correlation_id == "c-2"
        assert response.code == CONNECTIVITY
        assert "Cannot connect" in response.message

    @pytest.mark.asyncio
    async def test_network_timeout_is_timeout_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        response = await make_executor(handler).execute(build_call("c-3", API_URL, {}))
        assert response.code == TIMEOUT
        assert response.message == "Request timed out. The API server may be slow to respond."

    @pytest.mark.asyncio
    async def test_overall_deadline(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, json={})

        response = await make_executor(handler, timeout=0.05).execute(build_call("c-8", API_URL, {}))
        assert isinstance(response, ErrorEnvelope)
        assert response.code == TIMEOUT

    @pytest.mark.asyncio
    async def test_non_json_body_is_malformed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        response = await make_executor(handler).execute(build_call("c-4", API_URL, {}))
        assert isinstance(response, ErrorEnvelope)
        assert response.code == MALFORMED_RESPONSE
        assert response.message == "Invalid response from API server."

    @pytest.mark.asyncio
    async def test_json_error_status_is_still_a_result(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"message": "internal"})

        response = await make_executor(handler).execute(build_call("c-5", API_URL, {}))
        assert isinstance(response, ResultEnvelope)
        assert response.body == {"message": "internal"}

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_catch_all(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("socket hang up")

        response = await make_executor(handler).execute(build_call("c-6", API_URL, {}))
        assert response.code == UNKNOWN
        assert response.message == "socket hang up"

    @pytest.mark.asyncio
    async def test_no_retries(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        await make_executor(handler).execute(build_call("c-7", API_URL, {}))
        assert len(calls) == 1


class TestHandle:
    @pytest.mark.asyncio
    async def test_concurrent_calls_are_not_serialized(self):
        started = []
        release = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            started.append(json.loads(request.content)["n"])
            await release.wait()
            return httpx.Response(200, json={"n": json.loads(request.content)["n"]})

        executor = make_executor(handler)
        replies = []
        executor.handle(build_call("a", API_URL, {"n": 1}), replies.append)
        executor.handle(build_call("b", API_URL, {"n": 2}), replies.append)
        for _ in range(20):
            if len(started) == 2:
                break
            await asyncio.sleep(0.01)

        assert sorted(started) == [1, 2]
        assert executor.in_flight == 2
        release.set()
        await asyncio.sleep(0.05)
        assert {(r.correlation_id, r.body["n"]) for r in replies} == {("a", 1), ("b", 2)}
        assert executor.in_flight == 0

    @pytest.mark.asyncio
    async def test_aclose_cancels_in_flight(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(10)
            return httpx.Response(200, json={})

        executor = make_executor(handler)
        replies = []
        executor.handle(build_call("a", API_URL, {}), replies.append)
        await asyncio.sleep(0)
        await executor.aclose()
        assert executor.in_flight == 0
        assert replies == []
