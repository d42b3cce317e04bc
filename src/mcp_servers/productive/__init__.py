"""
Productive MCP Server

Exposes Productive.io to agents via Model Context Protocol over stdio.
"""

from src.mcp_servers.productive.config import ProductiveMCPConfig
from src.mcp_servers.productive.context import HandlerContext
from src.mcp_servers.productive.server import ProductiveMCPServer

__all__ = ["HandlerContext", "ProductiveMCPConfig", "ProductiveMCPServer"]
