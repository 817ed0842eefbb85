"""Workflow editing against the n8n REST API."""

from n8n_mcp.workflows.client import N8nClient
from n8n_mcp.workflows.editor import WorkflowEditor
from n8n_mcp.workflows.models import EditMode, EditResult, EditWorkflowArgs, PatchOperation

__all__ = [
    "EditMode",
    "EditResult",
    "EditWorkflowArgs",
    "N8nClient",
    "PatchOperation",
    "WorkflowEditor",
]
