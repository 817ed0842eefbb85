"""Tests for N8nClient against a mocked n8n API."""

import json
from typing import Any

import httpx
import pytest

from n8n_mcp.errors import RemoteStoreError
from n8n_mcp.workflows.client import API_KEY_HEADER, N8nClient


def _client(handler: Any) -> N8nClient:
    return N8nClient("https://n8n.example.com/", "key", transport=httpx.MockTransport(handler))


class TestN8nClientRequests:
    async def test_get_workflow(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "wf1", "nodes": []})

        result = await _client(handler).get_workflow("wf1")

        assert result == {"id": "wf1", "nodes": []}
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://n8n.example.com/api/v1/workflows/wf1"
        assert seen[0].headers[API_KEY_HEADER] == "key"
        assert seen[0].headers["Content-Type"] == "application/json"

    async def test_update_workflow_sends_full_document(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=json.loads(request.content))

        doc = {"nodes": [{"name": "Start"}], "active": True}
        await _client(handler).update_workflow("wf1", doc)

        assert seen[0].method == "PUT"
        assert json.loads(seen[0].content) == doc

    async def test_workflow_id_is_a_single_path_segment(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        await _client(handler).get_workflow("a/b")
        assert seen[0].url.raw_path == b"/api/v1/workflows/a%2Fb"

    async def test_empty_body_is_none(self) -> None:
        result = await _client(lambda r: httpx.Response(200)).get_workflow("wf1")
        assert result is None

    async def test_non_json_body_returned_as_text(self) -> None:
        result = await _client(lambda r: httpx.Response(200, text="plain")).get_workflow("wf1")
        assert result == "plain"


class TestN8nClientErrors:
    async def test_non_2xx_raises_with_json_body(self) -> None:
        handler = lambda r: httpx.Response(404, json={"message": "Not Found"})  # noqa: E731
        with pytest.raises(RemoteStoreError, match="n8n 404") as exc_info:
            await _client(handler).get_workflow("wf1")
        assert exc_info.value.status_code == 404
        assert exc_info.value.body == {"message": "Not Found"}

    async def test_non_2xx_raises_with_text_body(self) -> None:
        handler = lambda r: httpx.Response(500, text="boom")  # noqa: E731
        with pytest.raises(RemoteStoreError, match="n8n 500: boom"):
            await _client(handler).update_workflow("wf1", {})

    async def test_transport_error_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RemoteStoreError, match="connection refused") as exc_info:
            await _client(handler).get_workflow("wf1")
        assert exc_info.value.status_code is None

    async def test_no_retry_on_failure(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, text="unavailable")

        with pytest.raises(RemoteStoreError):
            await _client(handler).get_workflow("wf1")
        assert len(calls) == 1
