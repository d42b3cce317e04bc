"""
Productive Core

Resolution engine, executor context and executors shared by the CLI
and the MCP server.
"""
