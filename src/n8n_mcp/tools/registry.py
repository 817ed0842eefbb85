"""ToolRegistry — maps tool names to the handlers that implement them."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from n8n_mcp.errors import UnknownToolError
from n8n_mcp.protocol.models import ToolDescriptor


@runtime_checkable
class ToolHandler(Protocol):
    """A tool the server can expose and invoke."""

    @property
    def descriptor(self) -> ToolDescriptor:
        """Name, description and input schema advertised by ``tools/list``."""
        ...

    async def invoke(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Run the tool and return its structured (JSON-serializable) result."""
        ...


class ToolRegistry:
    """Read-only name-to-handler table.

    Usage::

        registry = ToolRegistry([EditWorkflowTool(editor)])
        registry.descriptors()              # for tools/list
        await registry.get(name).invoke(args)
    """

    def __init__(self, handlers: list[ToolHandler] | None = None) -> None:
        self._handlers: dict[str, ToolHandler] = {}
        for handler in handlers or []:
            self.register(handler)

    def register(self, handler: ToolHandler) -> None:
        name = handler.descriptor.name
        if name in self._handlers:
            msg = f"Tool already registered: {name}"
            raise ValueError(msg)
        self._handlers[name] = handler

    def get(self, name: str) -> ToolHandler:
        """Return the handler for *name* or raise :class:`UnknownToolError`."""
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)
        return handler

    def descriptors(self) -> list[ToolDescriptor]:
        return [handler.descriptor for handler in self._handlers.values()]
