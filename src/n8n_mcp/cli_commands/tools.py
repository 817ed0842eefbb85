"""``n8n-mcp tools`` — show the tools the server advertises."""

from __future__ import annotations

import click

from n8n_mcp.cli_commands._output import print_json, print_tools_table
from n8n_mcp.tools import EDIT_WORKFLOW_TOOL


@click.command()
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def tools(fmt: str) -> None:
    """List the registered tools and their input schema."""
    descriptors = [EDIT_WORKFLOW_TOOL]
    if fmt == "json":
        print_json({"tools": [d.to_json() for d in descriptors]})
    else:
        print_tools_table(descriptors)
