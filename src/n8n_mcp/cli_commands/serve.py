"""``n8n-mcp serve`` — run the HTTP server."""

from __future__ import annotations

import logging

import click

from n8n_mcp.cli_commands._output import console, fail, load_settings


@click.command()
@click.option("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Port to bind (default: $PORT or 8080).")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Log level.",
)
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to the console.")
@click.option("--otlp-endpoint", default=None, help="Also export spans via OTLP/gRPC.")
def serve(
    host: str | None,
    port: int | None,
    log_level: str,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve the MCP endpoint on POST /mcp."""
    import uvicorn

    from n8n_mcp.server.app import create_app

    settings = load_settings()
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if telemetry or otlp_endpoint:
        from n8n_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(export_to_console=telemetry, otlp_endpoint=otlp_endpoint)
        except ImportError as exc:
            fail("Telemetry error", exc)

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(
        f"MCP server listening on {bind_host}:{bind_port} (POST /mcp), "
        f"{len(settings.allowed_workflow_ids)} allowlisted workflow(s)"
    )
    uvicorn.run(create_app(settings), host=bind_host, port=bind_port, log_level=log_level)
