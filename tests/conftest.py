"""Shared fixtures: an in-memory n8n API behind ``httpx.MockTransport``."""

from __future__ import annotations

import copy
import json
from typing import Any

import httpx
import pytest

from n8n_mcp.config import Settings
from n8n_mcp.protocol.dispatcher import ProtocolDispatcher
from n8n_mcp.tools import EditWorkflowTool, ToolRegistry
from n8n_mcp.workflows import N8nClient, WorkflowEditor

BASE_URL = "https://n8n.example.com"
API_KEY = "test-api-key"
WORKFLOW_PREFIX = "/api/v1/workflows/"


class FakeN8n:
    """Records every request and serves/stores workflow documents."""

    def __init__(self, workflows: dict[str, Any]) -> None:
        self.workflows = copy.deepcopy(workflows)
        self.requests: list[httpx.Request] = []
        self.fail_with: tuple[int, str] | None = None

    @property
    def methods(self) -> list[str]:
        return [r.method for r in self.requests]

    def put_bodies(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests if r.method == "PUT"]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            status, text = self.fail_with
            return httpx.Response(status, text=text)
        if request.headers.get("X-N8N-API-KEY") != API_KEY:
            return httpx.Response(401, json={"message": "unauthorized"})

        workflow_id = request.url.path.removeprefix(WORKFLOW_PREFIX)
        if workflow_id not in self.workflows:
            return httpx.Response(404, json={"message": "Not Found"})
        if request.method == "PUT":
            self.workflows[workflow_id] = json.loads(request.content)
        return httpx.Response(200, json=self.workflows[workflow_id])


@pytest.fixture
def fake_n8n() -> FakeN8n:
    return FakeN8n({"wf1": {"nodes": [], "active": False}})


@pytest.fixture
def settings() -> Settings:
    return Settings(
        n8n_base_url=BASE_URL,
        n8n_api_key=API_KEY,
        allowed_workflow_ids=frozenset({"wf1"}),
    )


@pytest.fixture
def client(fake_n8n: FakeN8n) -> N8nClient:
    return N8nClient(BASE_URL, API_KEY, transport=fake_n8n.transport())


@pytest.fixture
def editor(client: N8nClient, settings: Settings) -> WorkflowEditor:
    return WorkflowEditor(client, settings.allowed_workflow_ids)


@pytest.fixture
def dispatcher(editor: WorkflowEditor) -> ProtocolDispatcher:
    return ProtocolDispatcher(ToolRegistry([EditWorkflowTool(editor)]))
