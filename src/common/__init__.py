"""
Common Infrastructure

Logging sanitisation, retry and telemetry helpers shared by the API client,
the CLI and the MCP server.
"""
