"""Productive - CLI and MCP server for the Productive.io API."""

__version__ = "0.1.0"
