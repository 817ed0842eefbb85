"""FastAPI application exposing the dispatcher on ``POST /mcp``."""

from __future__ import annotations

import logging
import secrets

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from n8n_mcp import __version__
from n8n_mcp.config import Settings
from n8n_mcp.protocol.dispatcher import ProtocolDispatcher
from n8n_mcp.tools import EditWorkflowTool, ToolRegistry
from n8n_mcp.workflows import N8nClient, WorkflowEditor

logger = logging.getLogger(__name__)

MCP_PATH = "/mcp"


def build_dispatcher(settings: Settings) -> ProtocolDispatcher:
    """Wire client → editor → tool → registry → dispatcher from *settings*."""
    client = N8nClient(
        settings.n8n_base_url,
        settings.n8n_api_key,
        timeout=settings.timeout,
    )
    editor = WorkflowEditor(client, settings.allowed_workflow_ids)
    registry = ToolRegistry([EditWorkflowTool(editor)])
    return ProtocolDispatcher(registry)


def is_authorized(settings: Settings, authorization: str | None) -> bool:
    """Static bearer-token check; an empty configured token disables auth."""
    if not settings.mcp_auth_token:
        return True
    expected = f"Bearer {settings.mcp_auth_token}"
    return secrets.compare_digest((authorization or "").encode(), expected.encode())


def create_app(settings: Settings, *, dispatcher: ProtocolDispatcher | None = None) -> FastAPI:
    """Build the HTTP app.

    Only ``POST /mcp`` is routed: other paths answer 404, other verbs on
    ``/mcp`` answer 405, a bad bearer token answers 401 without a JSON-RPC
    body.  Everything else answers 200 with the dispatcher's envelope.
    """
    mcp_dispatcher = dispatcher or build_dispatcher(settings)

    app = FastAPI(
        title="n8n MCP server",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.dispatcher = mcp_dispatcher

    @app.post(MCP_PATH)
    async def mcp(request: Request) -> Response:
        if not is_authorized(settings, request.headers.get("authorization")):
            logger.warning("Rejected unauthorized request from %s", request.client)
            return PlainTextResponse("Unauthorized", status_code=401)

        body = await request.body()
        payload = await mcp_dispatcher.handle_raw(body)
        return Response(content=payload, media_type="application/json")

    return app
