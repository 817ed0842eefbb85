"""HTTP transport for the MCP server."""

from n8n_mcp.server.app import build_dispatcher, create_app, is_authorized

__all__ = ["build_dispatcher", "create_app", "is_authorized"]
