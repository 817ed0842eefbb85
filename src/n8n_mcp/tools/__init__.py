"""Tool registry and the tools this server exposes."""

from n8n_mcp.tools.edit_workflow import EDIT_WORKFLOW_TOOL, EditWorkflowTool
from n8n_mcp.tools.registry import ToolHandler, ToolRegistry

__all__ = [
    "EDIT_WORKFLOW_TOOL",
    "EditWorkflowTool",
    "ToolHandler",
    "ToolRegistry",
]
