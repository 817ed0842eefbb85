"""MCP protocol layer — JSON-RPC models and method dispatch."""

from n8n_mcp.protocol.dispatcher import ProtocolDispatcher
from n8n_mcp.protocol.models import (
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    TextContent,
    ToolCallParams,
    ToolDescriptor,
)

__all__ = [
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ProtocolDispatcher",
    "TextContent",
    "ToolCallParams",
    "ToolDescriptor",
]
