"""n8n-mcp CLI entrypoint."""

from __future__ import annotations

import click

from n8n_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="n8n-mcp")
def main() -> None:
    """n8n-mcp — MCP server for editing allowlisted n8n workflows."""


# Register subcommands
from n8n_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
