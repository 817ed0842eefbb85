"""ProtocolDispatcher — parses JSON-RPC bodies and routes MCP methods."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel, ValidationError

from n8n_mcp import __version__
from n8n_mcp.errors import MalformedRequestError, UnsupportedMethodError
from n8n_mcp.protocol.models import (
    DEFAULT_PROTOCOL_VERSION,
    InitializeParams,
    JsonRpcRequest,
    JsonRpcResponse,
    ServerInfo,
    TextContent,
    ToolCallParams,
)
from n8n_mcp.utils.telemetry import (
    ATTR_ERROR_TYPE,
    ATTR_METHOD,
    ATTR_REQUEST_ID,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from n8n_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SERVER_NAME = "n8n-mcp-server"

_M = TypeVar("_M", bound=BaseModel)

MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class ProtocolDispatcher:
    """Turns one raw request body into one raw response body.

    Supported methods: ``initialize``, ``tools/list`` and ``tools/call``.
    Every failure (bad JSON, unknown method, unknown tool, remote or patch
    errors) is converted into a JSON-RPC error envelope; nothing escapes
    :meth:`handle_raw`.

    Usage::

        dispatcher = ProtocolDispatcher(ToolRegistry([EditWorkflowTool(editor)]))
        body = await dispatcher.handle_raw('{"id": 1, "method": "tools/list"}')
    """

    def __init__(
        self,
        registry: ToolRegistry,
        *,
        server_name: str = SERVER_NAME,
        server_version: str = __version__,
        default_protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ) -> None:
        self._registry = registry
        self._server_info = ServerInfo(name=server_name, version=server_version)
        self._default_protocol_version = default_protocol_version
        self._methods: dict[str, MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._tools_list,
            "tools/call": self._tools_call,
        }

    async def handle_raw(self, body: str | bytes) -> str:
        """Process a raw UTF-8 body and return the serialized envelope."""
        response = await self.handle_body(body)
        return json.dumps(response.to_json())

    async def handle_body(self, body: str | bytes) -> JsonRpcResponse:
        """Parse *body* and dispatch it, converting any failure to an error envelope.

        The request ``id`` is echoed whenever the body decoded to a JSON
        object; otherwise it is ``null``.
        """
        request_id: Any = None
        try:
            payload = self._decode(body)
            request_id = payload.get("id")
            try:
                request = JsonRpcRequest.model_validate(payload)
            except ValidationError as exc:
                msg = f"Invalid JSON-RPC request: {exc}"
                raise MalformedRequestError(msg) from exc
            return await self.dispatch(request)
        except Exception as exc:
            logger.warning("JSON-RPC request %r failed: %s", request_id, exc)
            return JsonRpcResponse.failure(request_id, str(exc) or type(exc).__name__)

    async def dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Route a validated request to its method handler.

        Raises
        ------
        UnsupportedMethodError
            If ``request.method`` is not one of the supported methods.
        """
        with _tracer.start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_METHOD, request.method)
            if request.id is not None:
                span.set_attribute(ATTR_REQUEST_ID, str(request.id))
            logger.debug("Dispatching %s (id=%r)", request.method, request.id)

            handler = self._methods.get(request.method)
            if handler is None:
                span.set_attribute(ATTR_ERROR_TYPE, UnsupportedMethodError.__name__)
                raise UnsupportedMethodError(request.method)

            try:
                result = await handler(request.params or {})
            except Exception as exc:
                span.set_attribute(ATTR_ERROR_TYPE, type(exc).__name__)
                raise
            return JsonRpcResponse.success(request.id, result)

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        init = _validate(InitializeParams, params, "initialize")
        return {
            "protocolVersion": (
                init.protocol_version
                if init.protocol_version is not None
                else self._default_protocol_version
            ),
            "serverInfo": self._server_info.model_dump(),
            "capabilities": {"tools": {}},
        }

    async def _tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [descriptor.to_json() for descriptor in self._registry.descriptors()]}

    async def _tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        call = _validate(ToolCallParams, params, "tools/call")
        handler = self._registry.get(call.name)

        with _tracer.start_as_current_span("mcp.tool_call") as span:
            span.set_attribute(ATTR_TOOL_NAME, call.name)
            result = await handler.invoke(call.arguments)

        content = TextContent(text=json.dumps(result))
        return {"content": [content.model_dump()]}

    @staticmethod
    def _decode(body: str | bytes) -> dict[str, Any]:
        try:
            text = body.decode("utf-8") if isinstance(body, bytes) else body
            payload = json.loads(text)
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            msg = f"Invalid JSON body: {exc}"
            raise MalformedRequestError(msg) from exc
        if not isinstance(payload, dict):
            msg = "JSON-RPC request must be an object"
            raise MalformedRequestError(msg)
        return payload


def _validate(model: type[_M], params: dict[str, Any], method: str) -> _M:
    try:
        return model.model_validate(params)
    except ValidationError as exc:
        msg = f"Invalid params for {method}: {exc}"
        raise MalformedRequestError(msg) from exc
