"""``n8n-mcp edit`` — run one workflow edit from the shell."""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TextIO

import click

from n8n_mcp.cli_commands._output import fail, load_settings, print_json
from n8n_mcp.errors import MCPServerError


@click.command()
@click.argument("workflow_id")
@click.option(
    "--patch",
    "patch_file",
    type=click.File("r"),
    default=None,
    help="JSON file holding the patch operations ('-' for stdin).",
)
@click.option("--apply", "apply_", is_flag=True, help="Write the patched workflow back.")
def edit(workflow_id: str, patch_file: TextIO | None, apply_: bool) -> None:
    """Fetch WORKFLOW_ID and optionally apply a JSON Patch to it.

    Without --apply this is a dry run and prints the current workflow.
    """
    from n8n_mcp.tools import EditWorkflowTool
    from n8n_mcp.workflows import N8nClient, WorkflowEditor

    settings = load_settings()

    try:
        patch = json.load(patch_file) if patch_file is not None else []
    except json.JSONDecodeError as exc:
        fail("Invalid patch file", exc)

    client = N8nClient(settings.n8n_base_url, settings.n8n_api_key, timeout=settings.timeout)
    tool = EditWorkflowTool(WorkflowEditor(client, settings.allowed_workflow_ids))
    arguments = {
        "workflowId": workflow_id,
        "mode": "apply" if apply_ else "dry_run",
        "patch": patch,
    }

    try:
        result = asyncio.run(tool.invoke(arguments))
    except MCPServerError as exc:
        fail("Edit error", exc)

    print_json(result)
    if not result.get("ok"):
        sys.exit(1)
