"""``edit_workflow`` — the tool that exposes :class:`WorkflowEditor` over MCP."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from n8n_mcp.errors import MalformedRequestError
from n8n_mcp.protocol.models import ToolDescriptor
from n8n_mcp.workflows.models import EditWorkflowArgs

if TYPE_CHECKING:
    from n8n_mcp.workflows.editor import WorkflowEditor

EDIT_WORKFLOW_TOOL = ToolDescriptor(
    name="edit_workflow",
    description=(
        "Get and edit an allowlisted n8n workflow using JSON Patch (RFC6902). "
        "dry_run returns the full workflow JSON without writing; "
        "apply writes and returns updated JSON."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "workflowId": {
                "type": "string",
                "description": "n8n workflow ID (must be allowlisted)",
            },
            "mode": {"type": "string", "enum": ["dry_run", "apply"]},
            "patch": {
                "type": "array",
                "description": "JSON Patch ops (RFC6902). Use [] for dry_run.",
                "items": {
                    "type": "object",
                    "properties": {
                        "op": {
                            "type": "string",
                            "enum": ["add", "remove", "replace", "move", "copy", "test"],
                        },
                        "path": {"type": "string"},
                        "from": {"type": "string"},
                        "value": {},
                    },
                    "required": ["op", "path"],
                    "additionalProperties": True,
                },
            },
        },
        "required": ["workflowId", "mode", "patch"],
        "additionalProperties": False,
    },
)


class EditWorkflowTool:
    """Satisfies :class:`~n8n_mcp.tools.registry.ToolHandler`."""

    def __init__(self, editor: WorkflowEditor) -> None:
        self._editor = editor

    @property
    def descriptor(self) -> ToolDescriptor:
        return EDIT_WORKFLOW_TOOL

    async def invoke(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Validate *arguments* against the input schema, then run the edit."""
        try:
            args = EditWorkflowArgs.model_validate(arguments)
        except ValidationError as exc:
            msg = f"Invalid arguments for {EDIT_WORKFLOW_TOOL.name}: {exc}"
            raise MalformedRequestError(msg) from exc

        result = await self._editor.edit(
            args.workflow_id,
            args.mode,
            [op.to_json() for op in args.patch],
        )
        return result.to_json()
