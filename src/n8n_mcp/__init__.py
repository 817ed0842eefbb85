"""n8n MCP server — edit allowlisted n8n workflows through a single MCP tool."""

from __future__ import annotations

__version__ = "1.0.0"
