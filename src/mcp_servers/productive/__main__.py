"""
Productive MCP Server CLI Entry Point

Run with:
    python -m src.mcp_servers.productive [OPTIONS]

Credentials come from PRODUCTIVE_API_TOKEN / PRODUCTIVE_ORG_ID (or the
PRODUCTIVE_MCP_ variants).
"""

from __future__ import annotations

import logging

import anyio
import typer

from src.common.logging import configure_sanitized_logging
from src.mcp_servers.productive.config import ProductiveMCPConfig

app = typer.Typer(
    name="productive-mcp",
    help="Productive MCP Server",
    add_completion=False,
)


@app.command()
def serve(
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (default from PRODUCTIVE_MCP_LOG_LEVEL)",
    ),
    strict: bool = typer.Option(
        None,
        "--strict/--no-strict",
        help="Reject ambiguous matches instead of accepting the first result",
    ),
) -> None:
    """Run the Productive MCP Server over stdio."""
    from src.mcp_servers.productive.transports.stdio import run_stdio_server

    config = ProductiveMCPConfig()
    if log_level:
        config = config.model_copy(update={"log_level": log_level})
    if strict is not None:
        config = config.model_copy(update={"resolve_strict": strict})

    # stdout carries the protocol, logs go to stderr
    configure_sanitized_logging(level=config.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting Productive MCP Server (transport={config.transport})")

    anyio.run(run_stdio_server, config)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
