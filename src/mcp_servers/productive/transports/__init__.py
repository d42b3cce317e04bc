"""
MCP Transport Implementations

- stdio: For Claude Desktop and other local MCP clients
"""

from src.mcp_servers.productive.transports.stdio import run_stdio_server

__all__ = ["run_stdio_server"]
