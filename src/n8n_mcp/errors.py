"""Shared error types for the MCP server."""

from __future__ import annotations

import json
from typing import Any


class MCPServerError(Exception):
    """Base error for all server failures."""


class ConfigError(MCPServerError):
    """Startup configuration is invalid."""


class ConfigMissingError(ConfigError):
    """A required configuration value is absent or empty."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing {name}")


class MalformedRequestError(MCPServerError):
    """The request body or its params do not match the expected shape."""


class UnsupportedMethodError(MCPServerError):
    """The JSON-RPC method is not handled by this server."""

    def __init__(self, method: str | None) -> None:
        self.method = method
        super().__init__(f"Unsupported method: {method}")


class UnknownToolError(MCPServerError):
    """``tools/call`` named a tool that is not registered."""

    def __init__(self, name: str | None) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class RemoteStoreError(MCPServerError):
    """The n8n API answered with a non-2xx status or could not be reached."""

    def __init__(self, status_code: int | None = None, body: Any = None, detail: str = "") -> None:
        self.status_code = status_code
        self.body = body
        if status_code is None:
            message = f"n8n request failed: {detail}"
        else:
            text = body if isinstance(body, str) else json.dumps(body)
            message = f"n8n {status_code}: {text}"
        super().__init__(message)


class PatchError(MCPServerError):
    """A JSON Patch operation could not be applied."""

    def __init__(self, detail: str, index: int | None = None) -> None:
        self.detail = detail
        self.index = index
        prefix = f"Patch operation {index}" if index is not None else "Patch"
        super().__init__(f"{prefix} failed: {detail}")
