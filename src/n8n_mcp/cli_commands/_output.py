"""Shared CLI output helpers."""

from __future__ import annotations

import json
import sys
from typing import Any, NoReturn

from rich.console import Console
from rich.table import Table

from n8n_mcp.config import Settings
from n8n_mcp.errors import ConfigError
from n8n_mcp.protocol.models import ToolDescriptor  # noqa: TC001

console = Console()


def load_settings() -> Settings:
    """Read settings from the environment or exit with status 1."""
    try:
        return Settings.from_env()
    except ConfigError as exc:
        fail("Configuration error", exc)


def fail(label: str, exc: BaseException) -> NoReturn:
    console.print(f"[red]{label}:[/red] {exc}")
    sys.exit(1)


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_tools_table(descriptors: list[ToolDescriptor]) -> None:
    """Pretty-print tool descriptors and their required arguments."""
    table = Table(title="Registered Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Required")
    table.add_column("Description")

    for descriptor in descriptors:
        required = descriptor.input_schema.get("required", [])
        table.add_row(
            descriptor.name,
            ", ".join(required) or "-",
            _truncate(descriptor.description),
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
