"""
stdio Transport for the Productive MCP Server

Uses the official MCP SDK for protocol handling. Tool calls are delegated to
ProductiveMCPServer so both transports share one code path.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from src.mcp_servers.productive.config import ProductiveMCPConfig
from src.mcp_servers.productive.server import ProductiveMCPServer
from src.mcp_servers.productive.tools import TOOL_DEFINITIONS

logger = logging.getLogger(__name__)


class ToolCallFailed(Exception):
    """Raised with the JSON error body so the SDK reports isError to the client."""


def create_mcp_server(productive_server: ProductiveMCPServer) -> Server:
    """Create the SDK server bound to a ProductiveMCPServer."""

    @asynccontextmanager
    async def server_lifespan(server: Server) -> AsyncIterator[dict]:
        logger.info("Initializing server resources...")
        await productive_server.initialize()
        try:
            yield {"productive_server": productive_server}
        finally:
            await productive_server.shutdown()
            logger.info("Server resources cleaned up")

    config = productive_server.config
    server = Server(
        name=config.server_name,
        version=config.server_version,
        lifespan=server_lifespan,
    )

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name=t["name"],
                description=t["description"],
                inputSchema=t["inputSchema"],
            )
            for t in TOOL_DEFINITIONS
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        result = await productive_server.call_tool(name, arguments or {})
        if result.is_error:
            raise ToolCallFailed(result.text)
        return [TextContent(type="text", text=result.text)]

    return server


async def run_stdio_server(config: ProductiveMCPConfig | None = None) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    logger.info("Starting stdio transport (MCP SDK Server)")

    server = create_mcp_server(ProductiveMCPServer(config))

    async with stdio_server() as (read_stream, write_stream):
        logger.info("stdio transport connected")
        await server.run(read_stream, write_stream, server.create_initialization_options())

    logger.info("stdio transport stopped")
